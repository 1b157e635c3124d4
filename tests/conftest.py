"""Shared test fixtures."""

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from burrow.core.event_bus import EventBus
from burrow.core.item.registry import CatalogRegistry
from burrow.main import app
from burrow.services.inventory_service import InventoryService


@pytest.fixture()
def client() -> Iterator[TestClient]:
    """FastAPI TestClient with the lifespan (catalog + service) running."""
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def registry() -> CatalogRegistry:
    return CatalogRegistry.default()


@pytest.fixture()
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def service(event_bus: EventBus, registry: CatalogRegistry) -> InventoryService:
    return InventoryService(event_bus, registry)
