"""인벤토리 Service — Core 엔진 호출 + 시트/은행 보관 + EventBus 통신

Service → Core 허용. 영속화는 외부 협력자의 몫이므로 시트와 은행은 메모리에만 보관한다.
배치 실패는 예외가 아니다. 결과 값(bool / TransferResult)으로 돌려준다.
공개 조작 하나가 이벤트 체인 하나다 (EventBus.operation).
"""

import uuid
from typing import Any, Iterable, Optional

from burrow.config import settings
from burrow.core.event_bus import EventBus, SheetEvent
from burrow.core.event_types import EventTypes
from burrow.core.inventory.entity import EntityRole, EntitySheet
from burrow.core.inventory.grid import CellMap, GridName
from burrow.core.inventory.migration import is_legacy
from burrow.core.inventory.placement import move_on_grid, rotate_on_grid
from burrow.core.inventory.transfer import (
    GridSlot,
    GroundSlot,
    Location,
    TransferResult,
    deposit_in_bank,
    discard_item,
    drop_on_cell,
    drop_on_ground,
    give_item,
    item_at,
)
from burrow.core.inventory.usage import clear_usage, mark_usage
from burrow.core.item.models import Bank, Item
from burrow.core.item.registry import CatalogRegistry
from burrow.core.item.resolver import resolve_item
from burrow.core.logging import get_logger

logger = get_logger(__name__)

SOURCE = "inventory_service"


class SheetNotFoundError(LookupError):
    """등록되지 않은 sheet_id"""


class BankNotFoundError(LookupError):
    """아직 아무것도 맡기지 않은 정착지"""


def make_location(grid: Optional[str], index: int) -> Location:
    """grid가 None이면 Ground 위치. 알 수 없는 grid 이름은 ValueError."""
    if grid is None:
        return GroundSlot(index=index)
    return GridSlot(grid=GridName(grid), index=index)


class InventoryService:
    """시트 CRUD + 인벤토리 조작 + 정착지 은행"""

    def __init__(
        self,
        event_bus: EventBus,
        registry: CatalogRegistry,
        log_limit: Optional[int] = None,
    ):
        self._bus = event_bus
        self._registry = registry
        self._log_limit = log_limit or settings.LOG_HISTORY_LIMIT
        self._sheets: dict[str, EntitySheet] = {}
        self._banks: dict[str, Bank] = {}

    @property
    def registry(self) -> CatalogRegistry:
        return self._registry

    # === 시트 관리 ===

    def create_sheet(
        self,
        name: str,
        role: EntityRole | str = EntityRole.CHARACTER,
        starting_items: Iterable[str] = (),
    ) -> tuple[str, EntitySheet]:
        """빈 시트 생성. starting_items는 해석 후 Paw → Pack → Ground 순으로 배치."""
        sheet = EntitySheet.for_role(name, role)
        sheet.stow_starting_items(starting_items, self._registry)
        sheet_id = str(uuid.uuid4())
        self._sheets[sheet_id] = sheet

        with self._bus.operation():
            self._emit(EventTypes.SHEET_CREATED, sheet_id, role=sheet.role.value)
        logger.info("Created %s sheet %s (%s)", sheet.role.value, name, sheet_id)
        return sheet_id, sheet

    def import_sheet(self, data: dict[str, Any]) -> tuple[str, EntitySheet]:
        """레코드에서 시트 복원. 레거시 형식은 마이그레이션된다."""
        legacy = is_legacy(data)
        sheet = EntitySheet.from_dict(data)
        sheet.check_invariants()
        sheet_id = str(uuid.uuid4())
        self._sheets[sheet_id] = sheet

        with self._bus.operation():
            if legacy:
                self._emit(EventTypes.INVENTORY_MIGRATED, sheet_id)
            self._emit(EventTypes.SHEET_CREATED, sheet_id, role=sheet.role.value)
        return sheet_id, sheet

    def get_sheet(self, sheet_id: str) -> EntitySheet:
        sheet = self._sheets.get(sheet_id)
        if sheet is None:
            raise SheetNotFoundError(f"Sheet not found: {sheet_id}")
        return sheet

    def list_sheets(self) -> dict[str, EntitySheet]:
        return dict(self._sheets)

    # === 아이템 조작 ===

    def add_item(self, sheet_id: str, name: str) -> tuple[bool, Item]:
        """이름 해석 후 Pack에 추가. 실패 시 Ground."""
        sheet = self.get_sheet(sheet_id)
        item = resolve_item(name, self._registry)
        with self._bus.operation():
            added = sheet.add_to_pack(item)
            self._after_change(sheet)
            event = EventTypes.ITEM_ADDED if added else EventTypes.ITEM_GROUNDED
            self._emit(event, sheet_id, item=item.name)
        return added, item

    def add_custom_item(
        self, sheet_id: str, name: str, width: int, height: int
    ) -> bool:
        sheet = self.get_sheet(sheet_id)
        with self._bus.operation():
            added = sheet.add_custom_item(name, width, height)
            self._after_change(sheet)
            event = EventTypes.ITEM_ADDED if added else EventTypes.ITEM_GROUNDED
            self._emit(event, sheet_id, item=name)
        return added

    def add_condition(self, sheet_id: str, name: str) -> bool:
        sheet = self.get_sheet(sheet_id)
        with self._bus.operation():
            added = sheet.add_condition(name, self._registry)
            self._after_change(sheet)
            if added:
                self._emit(EventTypes.CONDITION_ADDED, sheet_id, condition=name)
        return added

    def rotate(self, sheet_id: str, grid: str, index: int) -> bool:
        sheet = self.get_sheet(sheet_id)
        with self._bus.operation():
            rotated = rotate_on_grid(sheet.grid(grid), index)
            self._after_change(sheet)
            if rotated:
                self._emit(EventTypes.ITEM_ROTATED, sheet_id, grid=grid, index=index)
        return rotated

    def reposition(
        self, sheet_id: str, grid: str, index: int, row: int, col: int
    ) -> bool:
        """같은 그리드 안에서 anchor만 변경. 밀어내기 없음."""
        sheet = self.get_sheet(sheet_id)
        target = sheet.grid(grid)
        with self._bus.operation():
            moved = move_on_grid(target, index, row, col)
            self._after_change(sheet)
            if moved:
                self._emit(
                    EventTypes.ITEM_MOVED,
                    sheet_id,
                    item=target.items[index].item.name,
                    grid=grid,
                    row=row,
                    col=col,
                )
        return moved

    def move(
        self, sheet_id: str, source: Location, target: str, row: int, col: int
    ) -> TransferResult:
        sheet = self.get_sheet(sheet_id)
        with self._bus.operation():
            result = drop_on_cell(sheet, source, target, row, col)
            self._after_change(sheet)

            if result.placed is not None:
                self._emit(
                    EventTypes.ITEM_MOVED,
                    sheet_id,
                    item=result.placed.item.name,
                    grid=target,
                    row=row,
                    col=col,
                )
            if result.grounded:
                self._emit(
                    EventTypes.ITEM_GROUNDED,
                    sheet_id,
                    items=[i.name for i in result.grounded],
                )
        return result

    def to_ground(self, sheet_id: str, source: Location) -> TransferResult:
        sheet = self.get_sheet(sheet_id)
        with self._bus.operation():
            result = drop_on_ground(sheet, source)
            self._after_change(sheet)
            if result.success:
                self._emit(
                    EventTypes.ITEM_GROUNDED,
                    sheet_id,
                    items=[i.name for i in result.grounded],
                )
        return result

    def discard(self, sheet_id: str, source: Location) -> Optional[Item]:
        sheet = self.get_sheet(sheet_id)
        with self._bus.operation():
            item = discard_item(sheet, source)
            self._after_change(sheet)
            if item is not None:
                self._emit(EventTypes.ITEM_DISCARDED, sheet_id, item=item.name)
        return item

    def give(
        self, sheet_id: str, source: Location, receiver_id: str
    ) -> TransferResult:
        giver = self.get_sheet(sheet_id)
        receiver = self.get_sheet(receiver_id)
        with self._bus.operation():
            result = give_item(giver, source, receiver)
            self._after_change(giver)
            self._after_change(receiver)

            handed = result.placed.item if result.placed else None
            if handed is None and result.grounded:
                handed = result.grounded[0]
            if handed is not None:
                self._emit(
                    EventTypes.ITEM_GIVEN,
                    sheet_id,
                    item=handed.name,
                    receiver_id=receiver_id,
                )
                self._emit(
                    EventTypes.ITEM_RECEIVED,
                    receiver_id,
                    item=handed.name,
                    giver_id=sheet_id,
                    placed=result.success,
                )
        return result

    def set_usage(self, sheet_id: str, source: Location, mark: bool) -> bool:
        """사용 점 표시(mark=True) 또는 해제"""
        sheet = self.get_sheet(sheet_id)
        with self._bus.operation():
            changed = (mark_usage if mark else clear_usage)(sheet, source)
            self._after_change(sheet)
            if changed:
                item = item_at(sheet, source)
                self._emit(
                    EventTypes.USAGE_CHANGED,
                    sheet_id,
                    item=item.name,
                    used=item.usage.used,
                    total=item.usage.total,
                )
        return changed

    # === 정착지 은행 ===

    def deposit(self, sheet_id: str, source: Location, settlement: str) -> bool:
        """아이템을 정착지 은행에 맡긴다. 은행은 첫 입금 때 생긴다."""
        sheet = self.get_sheet(sheet_id)
        key = settlement.strip()
        bank = self._banks.get(key) or Bank(settlement_name=key)
        with self._bus.operation():
            deposited = deposit_in_bank(sheet, source, bank)
            self._after_change(sheet)
            if deposited:
                self._banks[key] = bank
                self._emit(
                    EventTypes.ITEM_DEPOSITED,
                    sheet_id,
                    item=bank.items[-1].name,
                    settlement=key,
                )
        return deposited

    def get_bank(self, settlement: str) -> Bank:
        bank = self._banks.get(settlement.strip())
        if bank is None:
            raise BankNotFoundError(f"No bank for settlement: {settlement}")
        return bank

    def cell_map(self, sheet_id: str, grid: str) -> CellMap:
        return self.get_sheet(sheet_id).grid(grid).build_cell_map()

    # === 내부 ===

    def _after_change(self, sheet: EntitySheet) -> None:
        """불변식 검사 + 로그 길이 제한"""
        sheet.check_invariants()
        if len(sheet.log) > self._log_limit:
            del sheet.log[: len(sheet.log) - self._log_limit]

    def _emit(self, event_type: str, sheet_id: str, **data: Any) -> None:
        self._bus.emit(
            SheetEvent(event_type=event_type, sheet_id=sheet_id, data=data, source=SOURCE)
        )
