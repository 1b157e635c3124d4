"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from burrow.api.banks import router as banks_router
from burrow.api.health import router as health_router
from burrow.api.sheets import router as sheets_router
from burrow.config import settings
from burrow.core.event_bus import EventBus
from burrow.core.item.registry import CatalogRegistry
from burrow.core.logging import get_logger, setup_logging
from burrow.services.activity_feed import ActivityFeed
from burrow.services.inventory_service import InventoryService

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


def build_registry() -> CatalogRegistry:
    """정적 테이블 + (설정 시) 홈브루 아이템"""
    registry = CatalogRegistry.default()
    if settings.HOMEBREW_ITEMS_PATH:
        registry.load_from_json(settings.HOMEBREW_ITEMS_PATH)
    return registry


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info("Building item catalog...")
    registry = build_registry()
    logger.info("Item catalog ready (%d items).", registry.count())

    event_bus = EventBus()
    app.state.event_bus = event_bus

    activity_feed = ActivityFeed(settings.LOG_HISTORY_LIMIT)
    activity_feed.attach(event_bus)
    app.state.activity_feed = activity_feed

    app.state.inventory_service = InventoryService(event_bus, registry)
    logger.info("InventoryService initialized.")

    yield

    logger.info("Shutting down...")
    event_bus.clear()


app = FastAPI(title="Burrow Sheets", debug=settings.DEBUG, lifespan=lifespan)

app.include_router(health_router)
app.include_router(sheets_router)
app.include_router(banks_router)
