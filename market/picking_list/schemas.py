from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class PickingListCreate(BaseModel):
    product_id: str
    quantity: int = Field(gt=0)
    price: float = Field(default=0, ge=0, allow_inf_nan=False)
    coming_increment_id: str


class PickingListUpdate(BaseModel):
    quantity: Optional[int] = Field(default=None, gt=0)
    price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)

    class Config:
        extra = "forbid"


class PickingListOut(BaseModel):
    id: str
    product_id: Optional[str] = None
    quantity: int
    price: float
    total_price: float
    coming_id: str
    coming_increment_id: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
