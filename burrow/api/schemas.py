"""API request/response schemas."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


# === Request Schemas ===


class CreateSheetRequest(BaseModel):
    """시트 생성 요청"""

    name: str = Field(..., min_length=1, max_length=80, description="엔티티 이름")
    role: str = Field("character", description="character | hireling | npc")
    starting_items: list[str] = Field(
        default_factory=list, description="시작 장비 이름 (Spell: X 형식 허용)"
    )


class ImportSheetRequest(BaseModel):
    """시트 레코드 가져오기 (레거시 inventory 형식 허용)"""

    data: dict[str, Any]


class AddItemRequest(BaseModel):
    """아이템 추가 요청. width/height를 주면 사용자 정의 Gear로 추가."""

    name: str = Field(..., min_length=1)
    width: Optional[int] = Field(None, ge=1, le=3)
    height: Optional[int] = Field(None, ge=1, le=3)


class AddConditionRequest(BaseModel):
    name: str = Field(..., min_length=1)


class LocationRef(BaseModel):
    """아이템 위치. grid가 없으면 Ground 인덱스."""

    grid: Optional[str] = Field(None, description="paw | body | pack, 없으면 ground")
    index: int = Field(..., ge=0)


class RotateRequest(BaseModel):
    grid: str
    index: int = Field(..., ge=0)


class DropRequest(BaseModel):
    """드래그 앤 드롭: source → target 그리드의 (row, col)"""

    source: LocationRef
    target: str
    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)


class GiveRequest(BaseModel):
    source: LocationRef
    receiver_id: str


class RepositionRequest(BaseModel):
    """같은 그리드 안에서 anchor 이동"""

    grid: str
    index: int = Field(..., ge=0)
    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)


class UsageRequest(BaseModel):
    source: LocationRef
    action: Literal["mark", "clear"] = "mark"


class DepositRequest(BaseModel):
    """정착지 은행 입금"""

    source: LocationRef
    settlement: str = Field(..., min_length=1, max_length=80)


# === Response Schemas ===


class SheetResponse(BaseModel):
    """시트 상태 응답"""

    sheet_id: str
    sheet: dict[str, Any]
    encumbered: bool = False


class OperationResponse(BaseModel):
    """인벤토리 조작 응답. 배치 실패는 success=false (HTTP 200)."""

    success: bool
    message: str = ""
    sheet: Optional[dict[str, Any]] = None


class CellMapResponse(BaseModel):
    grid: str
    rows: int
    cols: int
    cells: list[list[Optional[int]]]


class BankResponse(BaseModel):
    settlement_name: str
    pips: int = 0
    items: list[dict[str, Any]] = Field(default_factory=list)


class EventsResponse(BaseModel):
    """시트별 최근 이벤트 (오래된 것부터)"""

    sheet_id: str
    events: list[dict[str, Any]]


class ErrorResponse(BaseModel):
    """에러 응답"""

    success: bool = False
    error: str
    detail: Optional[str] = None
