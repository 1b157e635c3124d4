"""아이템 시스템 Core — 카탈로그, registry, 이름 해석"""

from .models import (
    Armour,
    Bank,
    Condition,
    ConditionTemplate,
    Gear,
    Item,
    ItemCategory,
    PlacedItem,
    Spell,
    SpellTemplate,
    UsageDots,
    Weapon,
)
from .registry import CatalogRegistry
from .resolver import resolve_item

__all__ = [
    "Armour",
    "Bank",
    "CatalogRegistry",
    "Condition",
    "ConditionTemplate",
    "Gear",
    "Item",
    "ItemCategory",
    "PlacedItem",
    "Spell",
    "SpellTemplate",
    "UsageDots",
    "Weapon",
    "resolve_item",
]
