"""레거시 인벤토리 마이그레이션

구 형식: {"inventory": [{"id": "paw-main", "type": "paw-main", "item": {...}}, ...]}
신 형식: pawGrid / bodyGrid / packGrid + ground

한 방향, 한 번만. 세 그리드가 모두 있으면 아무것도 하지 않는다.
"""

from typing import Any

from burrow.core.item.models import Item, require_mapping
from burrow.core.logging import get_logger

from .grid import BODY_DIMS, PAW_DIMS, Grid, GridDims
from .placement import place_on_grid

logger = get_logger(__name__)

LEGACY_FIELD = "inventory"
GRID_FIELDS = ("pawGrid", "bodyGrid", "packGrid")

# 레거시 슬롯 역할 → 그리드 필드
SLOT_ROLES = {
    "paw-main": "pawGrid",
    "paw-off": "pawGrid",
    "body": "bodyGrid",
    "pack": "packGrid",
}


def is_legacy(data: dict[str, Any]) -> bool:
    return not all(data.get(f) is not None for f in GRID_FIELDS)


def _slot_target(slot: dict[str, Any]) -> str | None:
    require_mapping(slot, "legacy slot")
    for key in ("type", "id"):
        role = slot.get(key)
        if isinstance(role, str) and role in SLOT_ROLES:
            return SLOT_ROLES[role]
    return None


def migrate_legacy_inventory(data: dict[str, Any], pack_dims: GridDims) -> bool:
    """레거시 슬롯 목록을 그리드로 변환 (data를 제자리 변경).

    각 아이템은 현재 충돌 규칙으로 다시 배치된다. 들어가지 않는 아이템과
    역할을 알 수 없는 슬롯의 아이템은 Ground로 간다.
    반환: 마이그레이션 수행 여부. 이미 변환된 데이터면 False.
    """
    if not is_legacy(data):
        return False

    grids = {
        "pawGrid": Grid.from_list(PAW_DIMS, data.get("pawGrid") or []),
        "bodyGrid": Grid.from_list(BODY_DIMS, data.get("bodyGrid") or []),
        "packGrid": Grid.from_list(pack_dims, data.get("packGrid") or []),
    }
    ground_records = data.get("ground") or []
    if not isinstance(ground_records, list):
        raise ValueError(f"Invalid ground record: expected a list, got {ground_records!r}")
    ground: list[dict[str, Any]] = list(ground_records)

    legacy_slots = data.get(LEGACY_FIELD)
    migrated = 0
    if legacy_slots is not None and not isinstance(legacy_slots, list):
        raise ValueError(f"Invalid legacy inventory: expected a list, got {legacy_slots!r}")
    for slot in legacy_slots or []:
        target = _slot_target(slot)
        record = slot.get("item")
        if not record:
            continue
        require_mapping(record, "legacy item")
        item = Item.from_dict({"type": "gear", **record})
        if target is not None and place_on_grid(grids[target], item) is not None:
            migrated += 1
            continue
        logger.info("Legacy item %s does not fit, moved to ground", item.name)
        ground.append(item.to_dict())
        migrated += 1

    for field_name, grid in grids.items():
        data[field_name] = grid.to_list()
    data["ground"] = ground
    data.pop(LEGACY_FIELD, None)

    logger.info("Migrated legacy inventory (%d items)", migrated)
    return True
