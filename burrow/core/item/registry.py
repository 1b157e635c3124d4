"""아이템 카탈로그 저장소 — 정적 테이블 + 홈브루 JSON 로드 + 동적 등록"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Optional

from . import catalog
from .models import (
    ConditionTemplate,
    Item,
    ItemCategory,
    SpellTemplate,
)

logger = logging.getLogger(__name__)

# 이름 조회 대상 카테고리 (주문/상태이상은 별도 템플릿으로 관리)
LOOKUP_CATEGORIES = (ItemCategory.WEAPON, ItemCategory.ARMOUR, ItemCategory.GEAR)


class CatalogRegistry:
    """
    아이템 카탈로그 저장소.
    시작 시 한 번 구성한 뒤 resolver에 참조로 넘긴다.
    키는 소문자 이름. 조회 결과는 항상 복사본이다.
    """

    def __init__(
        self,
        items: Iterable[Item] = (),
        spells: Iterable[SpellTemplate] = (),
        conditions: Iterable[ConditionTemplate] = (),
    ) -> None:
        self._items: dict[str, Item] = {}
        self._spells: dict[str, SpellTemplate] = {}
        self._conditions: dict[str, ConditionTemplate] = {}

        for item in items:
            self.register(item)
        for spell in spells:
            self._spells[spell.name.lower()] = spell
        for condition in conditions:
            self._conditions[condition.name.lower()] = condition

    @classmethod
    def default(cls) -> CatalogRegistry:
        """정적 테이블 전체로 구성한 registry."""
        return cls(
            items=(
                *catalog.WEAPONS,
                *catalog.ARMOUR,
                *catalog.AMMUNITION,
                *catalog.GEAR,
            ),
            spells=catalog.SPELL_TEMPLATES,
            conditions=catalog.CONDITION_TEMPLATES,
        )

    def load_from_json(self, path: str | Path) -> int:
        """홈브루 아이템 JSON 로드. 반환: 로드된 수량.

        JSON 배열의 각 객체를 Item.from_dict로 변환.
        주문/상태이상 type은 이름 조회 대상이 아니므로 건너뛴다.
        """
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            raw_list: list[dict] = json.load(f)

        count = 0
        for raw in raw_list:
            try:
                item = Item.from_dict(raw)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(
                    "Failed to load homebrew item: %s — %s", raw.get("name", "?"), e
                )
                continue
            if item.category not in LOOKUP_CATEGORIES:
                logger.warning(
                    "Skipping homebrew item %s: type %s is not catalogued",
                    item.name,
                    item.category.value,
                )
                continue
            self.register(item)
            count += 1

        logger.info("Loaded %d homebrew items from %s", count, path)
        return count

    def register(self, item: Item) -> None:
        """아이템 템플릿 등록.
        이미 존재하는 이름이면 경고 로그 후 덮어쓴다.
        """
        key = item.name.lower()
        if key in self._items:
            logger.warning("Overwriting existing catalog item: %s", item.name)
        self._items[key] = item.copy()

    def get(self, name: str) -> Optional[Item]:
        """대소문자 무시 조회. 없으면 None. 반환값은 새 복사본."""
        template = self._items.get(name.strip().lower())
        return template.copy() if template is not None else None

    def get_spell(self, name: str) -> Optional[SpellTemplate]:
        return self._spells.get(name.strip().lower())

    def get_condition(self, name: str) -> Optional[ConditionTemplate]:
        return self._conditions.get(name.strip().lower())

    def items_by_category(self, category: ItemCategory) -> list[Item]:
        """카테고리별 템플릿 복사본 목록 (등록 순서 유지)."""
        return [i.copy() for i in self._items.values() if i.category == category]

    def spells(self) -> list[SpellTemplate]:
        return list(self._spells.values())

    def conditions(self) -> list[ConditionTemplate]:
        return list(self._conditions.values())

    def count(self) -> int:
        """등록된 아이템 템플릿 수 (주문/상태이상 제외)."""
        return len(self._items)
