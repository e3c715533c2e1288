"""Point, shop and attendance schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from kukey_core.core.pricing import ItemCategory


class PurchaseItemRequest(BaseModel):
    """Schema for a shop purchase.

    `required_points` is the price the client displayed; it must match the
    server-side price table.
    """

    item_category: ItemCategory
    required_points: int = Field(..., ge=0)
    days: int | None = Field(None, gt=0, description="Reading ticket duration")


class PurchaseItemResponse(BaseModel):
    """Effect summary; only the field matching the item category is set."""

    viewable_until: datetime | None = None
    upgrade_level: int | None = None
    new_character_type: str | None = None
    spent_points: int
    point: int


class PointHistoryResponse(BaseModel):
    id: int
    change_point: int
    history: str
    result_point: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AttendanceResponse(BaseModel):
    point: int
