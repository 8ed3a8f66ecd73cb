from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class RemainderBase(BaseModel):
    product_id: str
    branch_id: str
    quantity: int = Field(ge=0)
    coming_price: float = Field(default=0, ge=0, allow_inf_nan=False)
    sale_price: float = Field(default=0, ge=0, allow_inf_nan=False)


class RemainderCreate(RemainderBase):
    pass


class RemainderUpdate(BaseModel):
    quantity: Optional[int] = Field(default=None, ge=0)
    coming_price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    sale_price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)

    class Config:
        extra = "forbid"  # product/branch of a ledger row never change

    @field_validator("quantity", "coming_price", "sale_price")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class RemainderOut(RemainderBase):
    id: str
    name: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
