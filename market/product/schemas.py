from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ProductBase(BaseModel):
    name: str
    price: float = Field(ge=0, allow_inf_nan=False)
    branch_id: str


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    branch_id: Optional[str] = None

    @field_validator("name", "price", "branch_id")
    @classmethod
    def not_null(cls, value):
        # omitted means unchanged; an explicit null is not a value
        if value is None:
            raise ValueError("may not be null")
        return value


class ProductOut(ProductBase):
    id: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
