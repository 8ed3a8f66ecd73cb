from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class SaleCreate(BaseModel):
    branch_id: str
    client_id: Optional[str] = None


class SaleUpdate(BaseModel):
    client_id: Optional[str] = None

    class Config:
        extra = "forbid"  # totals move only through line items and payments


class SaleOut(BaseModel):
    id: str
    increment_id: str
    branch_id: str
    client_id: Optional[str] = None
    total_price: float
    paid: float
    debt: float
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
