"""Settlement bank API endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from burrow.api.schemas import BankResponse, ErrorResponse
from burrow.api.sheets import get_inventory_service
from burrow.services.inventory_service import BankNotFoundError, InventoryService

router = APIRouter(prefix="/banks", tags=["banks"])


@router.get(
    "/{settlement}", response_model=BankResponse, responses={404: {"model": ErrorResponse}}
)
def get_bank(
    settlement: str,
    service: InventoryService = Depends(get_inventory_service),
) -> BankResponse:
    """정착지 은행 내용 조회"""
    try:
        bank = service.get_bank(settlement)
    except BankNotFoundError:
        raise HTTPException(status_code=404, detail=f"No bank for settlement: {settlement}")
    return BankResponse(**bank.to_dict())
