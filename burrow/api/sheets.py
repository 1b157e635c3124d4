"""Sheet inventory API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from burrow.api.schemas import (
    AddConditionRequest,
    AddItemRequest,
    CellMapResponse,
    CreateSheetRequest,
    DepositRequest,
    DropRequest,
    ErrorResponse,
    EventsResponse,
    GiveRequest,
    ImportSheetRequest,
    LocationRef,
    OperationResponse,
    RepositionRequest,
    RotateRequest,
    SheetResponse,
    UsageRequest,
)
from burrow.core.inventory.entity import EntitySheet
from burrow.core.inventory.grid import GridInvariantError
from burrow.core.inventory.transfer import Location
from burrow.core.logging import get_logger
from burrow.services.activity_feed import ActivityFeed
from burrow.services.inventory_service import (
    InventoryService,
    SheetNotFoundError,
    make_location,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/sheets", tags=["sheets"])

NOT_FOUND = {404: {"model": ErrorResponse}}
BAD_REQUEST = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


def get_inventory_service(request: Request) -> InventoryService:
    """InventoryService 인스턴스 반환 (의존성 주입)"""
    service: InventoryService = request.app.state.inventory_service
    return service


def get_activity_feed(request: Request) -> ActivityFeed:
    feed: ActivityFeed = request.app.state.activity_feed
    return feed


def _sheet_or_404(service: InventoryService, sheet_id: str) -> EntitySheet:
    try:
        return service.get_sheet(sheet_id)
    except SheetNotFoundError:
        raise HTTPException(status_code=404, detail=f"Sheet not found: {sheet_id}")


def _location(ref: LocationRef) -> Location:
    try:
        return make_location(ref.grid, ref.index)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown grid: {ref.grid}")


def _operation(success: bool, message: str, sheet: EntitySheet) -> OperationResponse:
    return OperationResponse(success=success, message=message, sheet=sheet.to_dict())


@router.post("", response_model=SheetResponse, responses={400: {"model": ErrorResponse}})
def create_sheet(
    body: CreateSheetRequest,
    service: InventoryService = Depends(get_inventory_service),
) -> SheetResponse:
    """
    시트 생성

    역할에 맞는 크기의 빈 그리드를 만들고 시작 장비를 배치합니다.
    """
    try:
        sheet_id, sheet = service.create_sheet(body.name, body.role, body.starting_items)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown role: {body.role}")
    return SheetResponse(
        sheet_id=sheet_id, sheet=sheet.to_dict(), encumbered=sheet.is_encumbered
    )


@router.post("/import", response_model=SheetResponse, responses={400: {"model": ErrorResponse}})
def import_sheet(
    body: ImportSheetRequest,
    service: InventoryService = Depends(get_inventory_service),
) -> SheetResponse:
    """
    시트 레코드 가져오기

    레거시 inventory 슬롯 형식은 그리드 형식으로 마이그레이션됩니다.
    """
    try:
        sheet_id, sheet = service.import_sheet(dict(body.data))
    except (KeyError, ValueError, GridInvariantError) as e:
        logger.warning("Rejected sheet import: %s", e)
        raise HTTPException(status_code=400, detail=f"Invalid sheet record: {e}")
    return SheetResponse(
        sheet_id=sheet_id, sheet=sheet.to_dict(), encumbered=sheet.is_encumbered
    )


@router.get("/{sheet_id}", response_model=SheetResponse, responses=NOT_FOUND)
def get_sheet(
    sheet_id: str,
    service: InventoryService = Depends(get_inventory_service),
) -> SheetResponse:
    """현재 시트 상태 조회"""
    sheet = _sheet_or_404(service, sheet_id)
    return SheetResponse(
        sheet_id=sheet_id, sheet=sheet.to_dict(), encumbered=sheet.is_encumbered
    )


@router.post("/{sheet_id}/items", response_model=OperationResponse, responses=NOT_FOUND)
def add_item(
    sheet_id: str,
    body: AddItemRequest,
    service: InventoryService = Depends(get_inventory_service),
) -> OperationResponse:
    """
    아이템 추가

    이름을 카탈로그로 해석해 Pack에 넣습니다. 공간이 없으면 Ground로 갑니다.
    width/height를 지정하면 사용자 정의 Gear로 추가합니다.
    """
    sheet = _sheet_or_404(service, sheet_id)
    if body.width is not None or body.height is not None:
        added = service.add_custom_item(
            sheet_id, body.name, body.width or 1, body.height or 1
        )
    else:
        added, _ = service.add_item(sheet_id, body.name)
    return _operation(added, sheet.log[-1] if sheet.log else "", sheet)


@router.post(
    "/{sheet_id}/conditions", response_model=OperationResponse, responses=NOT_FOUND
)
def add_condition(
    sheet_id: str,
    body: AddConditionRequest,
    service: InventoryService = Depends(get_inventory_service),
) -> OperationResponse:
    """상태이상 추가 (1x1, Pack)"""
    sheet = _sheet_or_404(service, sheet_id)
    added = service.add_condition(sheet_id, body.name)
    return _operation(added, sheet.log[-1] if sheet.log else "", sheet)


@router.post("/{sheet_id}/rotate", response_model=OperationResponse, responses=BAD_REQUEST)
def rotate_item(
    sheet_id: str,
    body: RotateRequest,
    service: InventoryService = Depends(get_inventory_service),
) -> OperationResponse:
    """그리드 위 아이템 제자리 회전"""
    sheet = _sheet_or_404(service, sheet_id)
    try:
        rotated = service.rotate(sheet_id, body.grid, body.index)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown grid: {body.grid}")
    return _operation(rotated, "Rotated." if rotated else "No room to rotate.", sheet)


@router.post(
    "/{sheet_id}/reposition", response_model=OperationResponse, responses=BAD_REQUEST
)
def reposition_item(
    sheet_id: str,
    body: RepositionRequest,
    service: InventoryService = Depends(get_inventory_service),
) -> OperationResponse:
    """같은 그리드 안에서 정확한 셀로 이동 (밀어내기 없음)"""
    sheet = _sheet_or_404(service, sheet_id)
    try:
        moved = service.reposition(sheet_id, body.grid, body.index, body.row, body.col)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown grid: {body.grid}")
    return _operation(moved, "Moved." if moved else "Doesn't fit there.", sheet)


@router.post("/{sheet_id}/drop", response_model=OperationResponse, responses=BAD_REQUEST)
def drop_item(
    sheet_id: str,
    body: DropRequest,
    service: InventoryService = Depends(get_inventory_service),
) -> OperationResponse:
    """
    드래그 앤 드롭

    점유 셀이면 기존 아이템을 밀어내고, 빈 셀이면 그 자리에만 시도합니다.
    """
    sheet = _sheet_or_404(service, sheet_id)
    source = _location(body.source)
    try:
        result = service.move(sheet_id, source, body.target, body.row, body.col)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown grid: {body.target}")
    return _operation(result.success, result.message, sheet)


@router.post("/{sheet_id}/ground", response_model=OperationResponse, responses=BAD_REQUEST)
def move_to_ground(
    sheet_id: str,
    body: LocationRef,
    service: InventoryService = Depends(get_inventory_service),
) -> OperationResponse:
    """그리드 아이템을 Ground로 내려놓기"""
    sheet = _sheet_or_404(service, sheet_id)
    result = service.to_ground(sheet_id, _location(body))
    return _operation(result.success, result.message, sheet)


@router.delete("/{sheet_id}/items", response_model=OperationResponse, responses=BAD_REQUEST)
def discard_item(
    sheet_id: str,
    grid: str | None = None,
    index: int = Query(..., ge=0),
    service: InventoryService = Depends(get_inventory_service),
) -> OperationResponse:
    """아이템 삭제 (되돌릴 수 없음)"""
    sheet = _sheet_or_404(service, sheet_id)
    item = service.discard(sheet_id, _location(LocationRef(grid=grid, index=index)))
    if item is None:
        return _operation(False, "Nothing to discard.", sheet)
    return _operation(True, f"Deleted {item.name}.", sheet)


@router.post("/{sheet_id}/give", response_model=OperationResponse, responses=BAD_REQUEST)
def give_item(
    sheet_id: str,
    body: GiveRequest,
    service: InventoryService = Depends(get_inventory_service),
) -> OperationResponse:
    """다른 시트에 아이템 전달"""
    sheet = _sheet_or_404(service, sheet_id)
    _sheet_or_404(service, body.receiver_id)
    result = service.give(sheet_id, _location(body.source), body.receiver_id)
    return _operation(result.success, result.message, sheet)


@router.post("/{sheet_id}/usage", response_model=OperationResponse, responses=BAD_REQUEST)
def change_usage(
    sheet_id: str,
    body: UsageRequest,
    service: InventoryService = Depends(get_inventory_service),
) -> OperationResponse:
    """사용 점 표시 / 해제"""
    sheet = _sheet_or_404(service, sheet_id)
    changed = service.set_usage(
        sheet_id, _location(body.source), mark=body.action == "mark"
    )
    if not changed:
        return _operation(False, "No usage to change.", sheet)
    return _operation(True, sheet.log[-1], sheet)


@router.post("/{sheet_id}/deposit", response_model=OperationResponse, responses=BAD_REQUEST)
def deposit_item(
    sheet_id: str,
    body: DepositRequest,
    service: InventoryService = Depends(get_inventory_service),
) -> OperationResponse:
    """
    정착지 은행에 맡기기

    은행은 해당 정착지에 첫 입금할 때 만들어집니다.
    """
    sheet = _sheet_or_404(service, sheet_id)
    if not body.settlement.strip():
        raise HTTPException(status_code=400, detail="Settlement name is blank")
    deposited = service.deposit(sheet_id, _location(body.source), body.settlement)
    if not deposited:
        return _operation(False, "Nothing to deposit.", sheet)
    return _operation(True, sheet.log[-1], sheet)


@router.get("/{sheet_id}/events", response_model=EventsResponse, responses=NOT_FOUND)
def get_events(
    sheet_id: str,
    limit: Optional[int] = Query(None, ge=0),
    service: InventoryService = Depends(get_inventory_service),
    feed: ActivityFeed = Depends(get_activity_feed),
) -> EventsResponse:
    """시트의 최근 인벤토리 이벤트"""
    _sheet_or_404(service, sheet_id)
    return EventsResponse(sheet_id=sheet_id, events=feed.recent(sheet_id, limit))


@router.get(
    "/{sheet_id}/cells/{grid}", response_model=CellMapResponse, responses=BAD_REQUEST
)
def get_cell_map(
    sheet_id: str,
    grid: str,
    service: InventoryService = Depends(get_inventory_service),
) -> CellMapResponse:
    """셀 → 점유 아이템 인덱스 맵"""
    sheet = _sheet_or_404(service, sheet_id)
    try:
        target = sheet.grid(grid)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown grid: {grid}")
    return CellMapResponse(
        grid=grid,
        rows=target.rows,
        cols=target.cols,
        cells=service.cell_map(sheet_id, grid),
    )
