"""공간 인벤토리 엔진 — 그리드, 배치, 이동/교환, 마이그레이션"""

from .entity import EntityRole, EntitySheet, dims_for
from .grid import (
    BODY_DIMS,
    HIRELING_PACK_DIMS,
    PACK_DIMS,
    PAW_DIMS,
    Grid,
    GridDims,
    GridInvariantError,
    GridName,
    InventoryError,
    occupied_cells,
)
from .migration import migrate_legacy_inventory
from .placement import move_on_grid, place_on_grid, rotate_item, rotate_on_grid
from .transfer import (
    GridSlot,
    GroundSlot,
    TransferResult,
    deposit_in_bank,
    discard_item,
    drop_on_cell,
    drop_on_ground,
    give_item,
    item_at,
    remove_from_grid,
)
from .usage import clear_usage, mark_usage

__all__ = [
    "BODY_DIMS",
    "HIRELING_PACK_DIMS",
    "PACK_DIMS",
    "PAW_DIMS",
    "EntityRole",
    "EntitySheet",
    "Grid",
    "GridDims",
    "GridInvariantError",
    "GridName",
    "GridSlot",
    "GroundSlot",
    "InventoryError",
    "TransferResult",
    "clear_usage",
    "deposit_in_bank",
    "dims_for",
    "discard_item",
    "drop_on_cell",
    "drop_on_ground",
    "give_item",
    "item_at",
    "mark_usage",
    "migrate_legacy_inventory",
    "move_on_grid",
    "occupied_cells",
    "place_on_grid",
    "remove_from_grid",
    "rotate_item",
    "rotate_on_grid",
]
