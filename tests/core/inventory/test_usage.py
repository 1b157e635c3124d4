"""사용 점 표시 / 해제 테스트"""

from __future__ import annotations

import pytest

from burrow.core.inventory.entity import EntitySheet
from burrow.core.inventory.grid import GridName
from burrow.core.inventory.transfer import GridSlot, GroundSlot
from burrow.core.inventory.usage import clear_usage, mark_usage
from burrow.core.item.models import Gear, PlacedItem, UsageDots


@pytest.fixture()
def sheet() -> EntitySheet:
    sheet = EntitySheet.for_role("Pip", "character")
    sheet.paw.items.append(
        PlacedItem(item=Gear(name="Torches", usage=UsageDots(total=2)), row=0, col=0)
    )
    sheet.ground.append(Gear(name="Rope", usage=UsageDots(total=3, used=1)))
    return sheet


class TestMarkUsage:
    def test_mark_on_grid(self, sheet: EntitySheet) -> None:
        assert mark_usage(sheet, GridSlot(GridName.PAW, 0))
        assert sheet.paw.get(0).item.usage.used == 1
        assert sheet.log == ["Marked usage on Torches (1/2)."]

    def test_used_up(self, sheet: EntitySheet) -> None:
        slot = GridSlot(GridName.PAW, 0)
        mark_usage(sheet, slot)
        assert mark_usage(sheet, slot)
        assert sheet.log[-1] == "Torches is used up."
        assert not mark_usage(sheet, slot)
        assert sheet.paw.get(0).item.usage.used == 2

    def test_mark_on_ground(self, sheet: EntitySheet) -> None:
        assert mark_usage(sheet, GroundSlot(0))
        assert sheet.ground[0].usage.used == 2

    def test_item_without_usage(self, sheet: EntitySheet) -> None:
        sheet.pack.items.append(PlacedItem(item=Gear(name="Tent", width=2), row=0, col=0))
        assert not mark_usage(sheet, GridSlot(GridName.PACK, 0))
        assert sheet.log == []

    def test_empty_location(self, sheet: EntitySheet) -> None:
        assert not mark_usage(sheet, GridSlot(GridName.BODY, 0))
        assert not mark_usage(sheet, GroundSlot(5))


class TestClearUsage:
    def test_clear(self, sheet: EntitySheet) -> None:
        assert clear_usage(sheet, GroundSlot(0))
        assert sheet.ground[0].usage.used == 0
        assert sheet.log == ["Cleared usage on Rope (0/3)."]

    def test_clear_at_zero(self, sheet: EntitySheet) -> None:
        assert not clear_usage(sheet, GridSlot(GridName.PAW, 0))
        assert sheet.log == []
