from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class SaleProductCreate(BaseModel):
    sale_id: str
    product_id: str
    quantity: int = Field(gt=0)


class SaleProductUpdate(BaseModel):
    quantity: int = Field(gt=0)

    class Config:
        extra = "forbid"  # price is a snapshot taken at sale time


class SaleProductOut(BaseModel):
    id: str
    product_id: Optional[str] = None
    sale_id: str
    sale_increment_id: str
    quantity: int
    price: float
    total_price: float
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
