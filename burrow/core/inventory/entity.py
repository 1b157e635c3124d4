"""엔티티 시트 — Paw / Body / Pack 그리드 + Ground + 활동 로그

캐릭터, 고용인, 생성 NPC가 같은 구조를 공유한다. 역할에 따라 Pack 크기만 다르다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator

from burrow.core.item.models import Condition, Gear, Item, require_mapping
from burrow.core.item.registry import CatalogRegistry
from burrow.core.item.resolver import resolve_item
from burrow.core.logging import get_logger

from .grid import (
    BODY_DIMS,
    HIRELING_PACK_DIMS,
    PACK_DIMS,
    PAW_DIMS,
    Grid,
    GridDims,
    GridName,
)
from .migration import migrate_legacy_inventory
from .placement import place_on_grid

logger = get_logger(__name__)


class EntityRole(str, Enum):
    CHARACTER = "character"
    HIRELING = "hireling"
    NPC = "npc"


def dims_for(grid_name: GridName, role: EntityRole) -> GridDims:
    """역할별 고정 그리드 크기"""
    if grid_name == GridName.PAW:
        return PAW_DIMS
    if grid_name == GridName.BODY:
        return BODY_DIMS
    if role == EntityRole.CHARACTER:
        return PACK_DIMS
    return HIRELING_PACK_DIMS


@dataclass
class EntitySheet:
    """한 엔티티의 인벤토리. 아이템은 항상 네 곳 중 정확히 한 곳에 있다."""

    name: str
    role: EntityRole
    paw: Grid
    body: Grid
    pack: Grid
    ground: list[Item] = field(default_factory=list)
    log: list[str] = field(default_factory=list)

    @classmethod
    def for_role(cls, name: str, role: EntityRole | str) -> EntitySheet:
        role = EntityRole(role)
        return cls(
            name=name,
            role=role,
            paw=Grid.of(dims_for(GridName.PAW, role)),
            body=Grid.of(dims_for(GridName.BODY, role)),
            pack=Grid.of(dims_for(GridName.PACK, role)),
        )

    # === 조회 ===

    def grid(self, name: GridName | str) -> Grid:
        """이름으로 그리드 조회. 알 수 없는 이름은 ValueError."""
        grid_name = GridName(name)
        if grid_name == GridName.PAW:
            return self.paw
        if grid_name == GridName.BODY:
            return self.body
        return self.pack

    def grids(self) -> Iterator[tuple[GridName, Grid]]:
        for grid_name in GridName:
            yield grid_name, self.grid(grid_name)

    def all_items(self) -> list[Item]:
        items = [p.item for _, g in self.grids() for p in g.items]
        return items + list(self.ground)

    def item_count(self) -> int:
        return sum(len(g) for _, g in self.grids()) + len(self.ground)

    @property
    def is_encumbered(self) -> bool:
        """Ground에 아이템이 남아 있으면 과적 상태."""
        return len(self.ground) > 0

    def check_invariants(self) -> None:
        for _, g in self.grids():
            g.check_invariants()

    def add_log(self, message: str) -> None:
        self.log.append(message)

    # === 편의 래퍼 ===

    def add_to_pack(self, item: Item) -> bool:
        """Pack에 first-fit 배치, 실패 시 Ground. 결과를 로그에 남긴다."""
        if place_on_grid(self.pack, item) is not None:
            self.add_log(f"Added {item.name} to pack.")
            return True
        self.ground.append(item.copy())
        self.add_log(f"No room in pack — {item.name} placed on ground.")
        logger.info("%s: no room in pack for %s, moved to ground", self.name, item.name)
        return False

    def add_custom_item(self, name: str, width: int = 1, height: int = 1) -> bool:
        """사용자 정의 Gear (slots = width * height)"""
        item = Gear(name=name, width=width, height=height, slots=width * height)
        return self.add_to_pack(item)

    def add_condition(self, name: str, registry: CatalogRegistry) -> bool:
        """1x1 상태이상을 Pack에 배치. 공간이 없으면 Ground로 보내지 않는다."""
        template = registry.get_condition(name)
        condition = Condition(
            name=template.name if template else name,
            description=template.effect if template else None,
        )
        if place_on_grid(self.pack, condition) is None:
            self.add_log(f"No inventory space for condition: {condition.name}")
            return False
        if template is not None:
            self.add_log(f"Gained condition: {template.name} — {template.effect}")
        else:
            self.add_log(f"Gained condition: {condition.name}")
        return True

    def stow_starting_items(
        self, names: Iterable[str], registry: CatalogRegistry
    ) -> list[Item]:
        """시작 장비 배치: Paw → Pack → Ground 순. 해석된 아이템 목록 반환."""
        resolved: list[Item] = []
        for raw_name in names:
            if not raw_name:
                continue
            item = resolve_item(raw_name, registry)
            resolved.append(item)
            if place_on_grid(self.paw, item) is not None:
                continue
            if place_on_grid(self.pack, item) is not None:
                continue
            self.ground.append(item.copy())
            self.add_log(f"No room for {item.name} — placed on ground.")
        return resolved

    # === 레코드 ===

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "role": self.role.value,
            "pawGrid": self.paw.to_list(),
            "bodyGrid": self.body.to_list(),
            "packGrid": self.pack.to_list(),
            "ground": [item.to_dict() for item in self.ground],
            "log": list(self.log),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EntitySheet:
        """레코드 복원. 레거시 형식이면 먼저 마이그레이션한다 (입력 dict를 변경).

        형식이 잘못된 레코드는 ValueError.
        """
        require_mapping(data, "sheet")
        role = EntityRole(data.get("role", EntityRole.CHARACTER.value))
        migrate_legacy_inventory(data, dims_for(GridName.PACK, role))
        for key in ("ground", "log"):
            if not isinstance(data.get(key, []), list):
                raise ValueError(f"Invalid {key} record: expected a list")
        return cls(
            name=data.get("name", ""),
            role=role,
            paw=Grid.from_list(dims_for(GridName.PAW, role), data["pawGrid"]),
            body=Grid.from_list(dims_for(GridName.BODY, role), data["bodyGrid"]),
            pack=Grid.from_list(dims_for(GridName.PACK, role), data["packGrid"]),
            ground=[Item.from_dict(r) for r in data.get("ground", [])],
            log=list(data.get("log", [])),
        )
