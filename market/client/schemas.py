from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class ClientBase(BaseModel):
    first_name: str
    last_name: Optional[str] = None
    father_name: Optional[str] = None
    phone: Optional[str] = None
    birthday: Optional[date] = None
    gender: Optional[str] = None
    branch_id: Optional[str] = None


class ClientCreate(ClientBase):
    pass


class ClientUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    father_name: Optional[str] = None
    phone: Optional[str] = None
    birthday: Optional[date] = None
    gender: Optional[str] = None
    branch_id: Optional[str] = None
    active: Optional[str] = None

    @field_validator("first_name", "active")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class ClientOut(ClientBase):
    id: str
    active: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
