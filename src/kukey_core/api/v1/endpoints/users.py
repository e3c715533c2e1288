# src/kukey_core/api/v1/endpoints/users.py
"""User point economy endpoints: shop, history and attendance."""

from fastapi import APIRouter, status

from kukey_core.schemas.common import ERROR_RESPONSES
from kukey_core.schemas.point import (
    AttendanceResponse,
    PointHistoryResponse,
    PurchaseItemRequest,
    PurchaseItemResponse,
)
from kukey_core.services.attendance import AttendanceService
from kukey_core.services.item_shop import (
    EvolutionEffect,
    ItemShop,
    PurchaseResult,
    ReadingTicketEffect,
    TypeChangeEffect,
)
from kukey_core.services.point_ledger import PointLedger

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/user", tags=["user"], responses=ERROR_RESPONSES)


def _to_response(result: PurchaseResult) -> PurchaseItemResponse:
    response = PurchaseItemResponse(spent_points=result.cost, point=result.balance)
    effect = result.effect
    if isinstance(effect, ReadingTicketEffect):
        response.viewable_until = effect.viewable_until
    elif isinstance(effect, EvolutionEffect):
        response.upgrade_level = effect.level
    elif isinstance(effect, TypeChangeEffect):
        response.new_character_type = effect.character_type
    return response


@router.post("/purchase-item", response_model=PurchaseItemResponse)
async def purchase_item(
    body: PurchaseItemRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> PurchaseItemResponse:
    """Buy an item; the stated price must match the server price table."""
    metadata = body.model_dump(exclude={"item_category", "required_points"}, exclude_none=True)
    result = ItemShop(db).purchase(
        current_user.id,
        body.item_category,
        body.required_points,
        metadata,
    )
    return _to_response(result)


@router.get("/point-history", response_model=list[PointHistoryResponse])
async def get_point_history(
    current_user: CurrentUserDep,
    db: SessionDep,
) -> list[PointHistoryResponse]:
    """Return the caller's point history, newest first."""
    histories = PointLedger(db).history(current_user.id)
    return [PointHistoryResponse.model_validate(history) for history in histories]


@router.post("/attendance-check", status_code=status.HTTP_201_CREATED, response_model=AttendanceResponse)
async def check_attendance(
    current_user: CurrentUserDep,
    db: SessionDep,
) -> AttendanceResponse:
    balance = AttendanceService(db).check_in(current_user.id)
    return AttendanceResponse(point=balance)
