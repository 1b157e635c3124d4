"""ActivityFeed 테스트 — 버스 구독, 시트별 보관, 길이 제한"""

from __future__ import annotations

from burrow.core.event_bus import EventBus, SheetEvent
from burrow.core.event_types import EventTypes
from burrow.core.inventory.transfer import GridSlot
from burrow.core.item.registry import CatalogRegistry
from burrow.services.activity_feed import ActivityFeed
from burrow.services.inventory_service import InventoryService


def _event(event_type: str, sheet_id: str | None, **data) -> SheetEvent:
    return SheetEvent(event_type=event_type, sheet_id=sheet_id, data=data, source="test")


class TestRecord:
    def test_grouped_by_sheet(self) -> None:
        feed = ActivityFeed(limit=10)
        feed.record(_event(EventTypes.ITEM_ADDED, "a", item="Rope"))
        feed.record(_event(EventTypes.ITEM_ADDED, "b", item="Torch"))
        assert feed.recent("a") == [{"event_type": "item_added", "item": "Rope"}]
        assert feed.recent("missing") == []

    def test_oldest_dropped_past_limit(self) -> None:
        feed = ActivityFeed(limit=2)
        for name in ("Rope", "Torch", "Cheese"):
            feed.record(_event(EventTypes.ITEM_ADDED, "a", item=name))
        assert [e["item"] for e in feed.recent("a")] == ["Torch", "Cheese"]

    def test_recent_limit(self) -> None:
        feed = ActivityFeed(limit=10)
        for name in ("Rope", "Torch"):
            feed.record(_event(EventTypes.ITEM_ADDED, "a", item=name))
        assert [e["item"] for e in feed.recent("a", limit=1)] == ["Torch"]
        assert feed.recent("a", limit=0) == []

    def test_event_without_sheet_ignored(self) -> None:
        feed = ActivityFeed(limit=10)
        feed.record(_event(EventTypes.ITEM_ADDED, None))
        assert feed.recent("None") == []


class TestAttached:
    def test_collects_service_operations(self, registry: CatalogRegistry) -> None:
        bus = EventBus()
        feed = ActivityFeed(limit=50)
        feed.attach(bus)
        service = InventoryService(bus, registry)

        pip_id, _ = service.create_sheet("Pip", starting_items=["Rope"])
        bram_id, _ = service.create_sheet("Bram", "hireling")
        service.give(pip_id, GridSlot("paw", 0), bram_id)

        assert [e["event_type"] for e in feed.recent(pip_id)] == [
            EventTypes.SHEET_CREATED,
            EventTypes.ITEM_GIVEN,
        ]
        assert feed.recent(bram_id)[-1] == {
            "event_type": EventTypes.ITEM_RECEIVED,
            "item": "Rope",
            "giver_id": pip_id,
            "placed": True,
        }

    def test_repeated_operation_recorded_each_time(
        self, registry: CatalogRegistry
    ) -> None:
        bus = EventBus()
        feed = ActivityFeed(limit=50)
        feed.attach(bus)
        service = InventoryService(bus, registry)

        sheet_id, _ = service.create_sheet("Pip")
        service.add_item(sheet_id, "Rope")
        service.add_item(sheet_id, "Rope")

        added = [e for e in feed.recent(sheet_id) if e["event_type"] == EventTypes.ITEM_ADDED]
        assert len(added) == 2

    def test_detach(self) -> None:
        bus = EventBus()
        feed = ActivityFeed(limit=5)
        feed.attach(bus)
        feed.detach(bus)
        bus.emit(_event(EventTypes.ITEM_ADDED, "a"))
        assert feed.recent("a") == []
