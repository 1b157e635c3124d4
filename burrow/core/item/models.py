"""아이템 도메인 모델 (I/O 무관)

Item은 카테고리별 하위 클래스로 나뉜다 (tagged variant).
damage는 Weapon에만, defence는 Armour에만 존재한다.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, ClassVar, Optional


def require_mapping(data: Any, what: str) -> None:
    """레코드 형식 검사. dict가 아니면 ValueError."""
    if not isinstance(data, dict):
        raise ValueError(f"Invalid {what} record: expected an object, got {data!r}")


class ItemCategory(str, Enum):
    WEAPON = "weapon"
    ARMOUR = "armour"
    GEAR = "gear"
    SPELL = "spell"
    CONDITION = "condition"


@dataclass
class UsageDots:
    """소모 카운터. 0 <= used <= total."""

    total: int
    used: int = 0

    def __post_init__(self) -> None:
        if self.total < 0 or not 0 <= self.used <= self.total:
            raise ValueError(
                f"Invalid usage dots: used={self.used}, total={self.total}"
            )

    @property
    def is_depleted(self) -> bool:
        return self.used >= self.total

    def mark(self) -> bool:
        """사용 1회 표시. 이미 가득 차 있으면 False."""
        if self.is_depleted:
            return False
        self.used += 1
        return True

    def clear(self) -> bool:
        """사용 표시 1개 해제. 0이면 False."""
        if self.used == 0:
            return False
        self.used -= 1
        return True

    def copy(self) -> UsageDots:
        return UsageDots(total=self.total, used=self.used)

    def to_dict(self) -> dict[str, int]:
        return {"total": self.total, "used": self.used}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UsageDots:
        require_mapping(data, "usage")
        try:
            return cls(total=int(data["total"]), used=int(data.get("used", 0)))
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid usage record: {data!r}") from e


@dataclass
class Item:
    """모든 아이템의 공통 상위 타입 — 식별자 + footprint."""

    category: ClassVar[ItemCategory]

    name: str

    # footprint (셀 단위)
    width: int = 1
    height: int = 1

    # 논리 슬롯 비용. 대부분 width * height지만 항상 그렇지는 않다 (Cart = 0)
    slots: int = 1

    usage: Optional[UsageDots] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(
                f"Invalid footprint for {self.name!r}: {self.width}x{self.height}"
            )

    @property
    def is_square(self) -> bool:
        return self.width == self.height

    def copy(self) -> Item:
        """값 복사. usage는 깊은 복사되어 원본과 공유되지 않는다."""
        return replace(self, usage=self.usage.copy() if self.usage else None)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "type": self.category.value,
            "slots": self.slots,
            "width": self.width,
            "height": self.height,
        }
        if self.usage is not None:
            data["usage"] = self.usage.to_dict()
        if self.description is not None:
            data["description"] = self.description
        return data

    @staticmethod
    def from_dict(data: dict[str, Any]) -> Item:
        """type 필드로 하위 클래스를 선택해 복원.

        알 수 없는 type, 누락 필드, 잘못된 값 형식은 모두 ValueError.
        """
        require_mapping(data, "item")
        try:
            item_cls = ITEM_CLASSES[ItemCategory(data["type"])]
        except (KeyError, ValueError) as e:
            raise ValueError(f"Unknown item type: {data.get('type')!r}") from e

        try:
            kwargs: dict[str, Any] = {
                "name": str(data["name"]),
                "width": int(data.get("width", 1)),
                "height": int(data.get("height", 1)),
                "slots": int(data.get("slots", 1)),
                "description": data.get("description"),
            }
            if item_cls is Armour and data.get("defence") is not None:
                kwargs["defence"] = int(data["defence"])
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid item record: {data!r}") from e
        if data.get("usage") is not None:
            kwargs["usage"] = UsageDots.from_dict(data["usage"])
        if item_cls is Weapon:
            kwargs["damage"] = data.get("damage")
        return item_cls(**kwargs)


@dataclass
class Weapon(Item):
    category: ClassVar[ItemCategory] = ItemCategory.WEAPON

    damage: Optional[str] = None  # "d6", "d6/d8", "d10"

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.damage is not None:
            data["damage"] = self.damage
        return data


@dataclass
class Armour(Item):
    category: ClassVar[ItemCategory] = ItemCategory.ARMOUR

    defence: int = 0

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["defence"] = self.defence
        return data


@dataclass
class Gear(Item):
    category: ClassVar[ItemCategory] = ItemCategory.GEAR


@dataclass
class Spell(Item):
    category: ClassVar[ItemCategory] = ItemCategory.SPELL


@dataclass
class Condition(Item):
    category: ClassVar[ItemCategory] = ItemCategory.CONDITION


ITEM_CLASSES: dict[ItemCategory, type[Item]] = {
    ItemCategory.WEAPON: Weapon,
    ItemCategory.ARMOUR: Armour,
    ItemCategory.GEAR: Gear,
    ItemCategory.SPELL: Spell,
    ItemCategory.CONDITION: Condition,
}


@dataclass(frozen=True)
class SpellTemplate:
    """주문 원형 — 불변. 주문 아이템은 요청 시 합성된다."""

    name: str
    description: str
    recharge: str = ""


@dataclass(frozen=True)
class ConditionTemplate:
    """상태이상 원형 — 불변."""

    name: str
    effect: str
    clear: str
    slots: int = 1


@dataclass
class PlacedItem:
    """컨테이너 안에 anchor(row, col)로 고정된 아이템."""

    item: Item
    row: int
    col: int

    def cells(self) -> list[tuple[int, int]]:
        return [
            (self.row + r, self.col + c)
            for r in range(self.item.height)
            for c in range(self.item.width)
        ]

    def to_dict(self) -> dict[str, Any]:
        return {"item": self.item.to_dict(), "row": self.row, "col": self.col}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlacedItem:
        require_mapping(data, "placed item")
        try:
            row, col = int(data["row"]), int(data["col"])
            record = data["item"]
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid placed item record: {data!r}") from e
        return cls(item=Item.from_dict(record), row=row, col=col)


@dataclass
class Bank:
    """정착지 은행 — pips + 순서 없는 아이템 목록."""

    settlement_name: str
    pips: int = 0
    items: list[Item] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "settlement_name": self.settlement_name,
            "pips": self.pips,
            "items": [item.to_dict() for item in self.items],
        }
