"""EntitySheet 테스트 — 역할별 크기, 편의 래퍼, 레코드"""

from __future__ import annotations

import pytest

from burrow.core.inventory.entity import EntityRole, EntitySheet
from burrow.core.inventory.grid import HIRELING_PACK_DIMS, PACK_DIMS, PAW_DIMS
from burrow.core.item.models import Armour, Condition, Gear, Weapon
from burrow.core.item.registry import CatalogRegistry


# ── 생성 ─────────────────────────────────────────────────────


class TestForRole:
    def test_character_dims(self) -> None:
        sheet = EntitySheet.for_role("Pip", EntityRole.CHARACTER)
        assert sheet.paw.dims == PAW_DIMS
        assert sheet.pack.dims == PACK_DIMS

    def test_hireling_and_npc_have_small_pack(self) -> None:
        assert EntitySheet.for_role("Bram", "hireling").pack.dims == HIRELING_PACK_DIMS
        assert EntitySheet.for_role("Moss", "npc").pack.dims == HIRELING_PACK_DIMS

    def test_unknown_role(self) -> None:
        with pytest.raises(ValueError):
            EntitySheet.for_role("Pip", "dragon")

    def test_unknown_grid(self) -> None:
        with pytest.raises(ValueError):
            EntitySheet.for_role("Pip", "character").grid("tail")


# ── add_to_pack / add_custom_item ────────────────────────────


class TestAddToPack:
    def test_added(self) -> None:
        sheet = EntitySheet.for_role("Pip", "character")
        assert sheet.add_to_pack(Gear(name="Rope"))
        assert sheet.pack.get(0).item.name == "Rope"
        assert sheet.log == ["Added Rope to pack."]
        assert not sheet.is_encumbered

    def test_full_pack_goes_to_ground(self) -> None:
        sheet = EntitySheet.for_role("Bram", "hireling")
        sheet.add_to_pack(Gear(name="Tent", width=2))
        assert not sheet.add_to_pack(Gear(name="Rope"))
        assert [i.name for i in sheet.ground] == ["Rope"]
        assert sheet.log[-1] == "No room in pack — Rope placed on ground."
        assert sheet.is_encumbered

    def test_custom_item_slots(self) -> None:
        sheet = EntitySheet.for_role("Pip", "character")
        assert sheet.add_custom_item("Crate", 2, 2)
        item = sheet.pack.get(0).item
        assert isinstance(item, Gear)
        assert (item.width, item.height, item.slots) == (2, 2, 4)


# ── add_condition ────────────────────────────────────────────


class TestAddCondition:
    def test_known_condition(self, registry: CatalogRegistry) -> None:
        sheet = EntitySheet.for_role("Pip", "character")
        assert sheet.add_condition("injured", registry)
        item = sheet.pack.get(0).item
        assert isinstance(item, Condition)
        assert item.name == "Injured"
        assert sheet.log[-1] == (
            "Gained condition: Injured — Disadvantage on STR and DEX saves."
        )

    def test_no_space_is_not_grounded(self, registry: CatalogRegistry) -> None:
        sheet = EntitySheet.for_role("Bram", "hireling")
        sheet.add_to_pack(Gear(name="Tent", width=2))
        assert not sheet.add_condition("Hungry", registry)
        assert sheet.ground == []
        assert sheet.log[-1] == "No inventory space for condition: Hungry"


# ── stow_starting_items ──────────────────────────────────────


class TestStowStartingItems:
    def test_paw_then_pack(self, registry: CatalogRegistry) -> None:
        sheet = EntitySheet.for_role("Pip", "character")
        sheet.stow_starting_items(
            ["Spear (medium, d8)", "Shield (light, +1 armour)"], registry
        )
        spear = sheet.paw.get(0)
        assert isinstance(spear.item, Weapon)
        assert (spear.row, spear.col) == (0, 0)
        shield = sheet.pack.get(0)
        assert isinstance(shield.item, Armour)
        assert (shield.row, shield.col) == (0, 0)

    def test_overflow_to_ground(self, registry: CatalogRegistry) -> None:
        sheet = EntitySheet.for_role("Bram", "hireling")
        sheet.stow_starting_items(["Spear", "Tent", "Spell: Heal"], registry)
        assert [i.name for i in sheet.ground] == ["Heal"]
        assert sheet.log == ["No room for Heal — placed on ground."]
        assert sheet.item_count() == 3

    def test_blank_names_skipped(self, registry: CatalogRegistry) -> None:
        sheet = EntitySheet.for_role("Pip", "character")
        assert sheet.stow_starting_items(["", "Rope"], registry)[0].name == "Rope"


# ── to_dict / from_dict ──────────────────────────────────────


class TestRecords:
    def test_record_keys(self, registry: CatalogRegistry) -> None:
        sheet = EntitySheet.for_role("Pip", "character")
        sheet.stow_starting_items(["Sword", "Torches"], registry)
        data = sheet.to_dict()
        assert set(data) == {
            "name",
            "role",
            "pawGrid",
            "bodyGrid",
            "packGrid",
            "ground",
            "log",
        }
        restored = EntitySheet.from_dict(data)
        assert restored == sheet

    def test_from_dict_migrates_legacy(self) -> None:
        data = {
            "name": "Pip",
            "role": "character",
            "inventory": [
                {"id": "paw-main", "type": "paw-main", "item": {"name": "Needle", "type": "weapon"}},
            ],
        }
        sheet = EntitySheet.from_dict(data)
        assert sheet.paw.get(0).item.name == "Needle"
        assert "inventory" not in data

    @pytest.mark.parametrize(
        "record",
        [
            ["Pip"],
            {"pawGrid": [], "bodyGrid": [], "packGrid": [], "ground": {"name": "Rope"}},
            {"pawGrid": [], "bodyGrid": [], "packGrid": [], "log": "hello"},
            {"pawGrid": [], "bodyGrid": [], "packGrid": [], "ground": [{"name": "Rope", "type": "gear", "usage": 3}]},
        ],
    )
    def test_malformed_record(self, record: object) -> None:
        with pytest.raises(ValueError):
            EntitySheet.from_dict(record)  # type: ignore[arg-type]
