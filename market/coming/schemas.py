from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ComingCreate(BaseModel):
    branch_id: str


class ComingUpdate(BaseModel):
    branch_id: Optional[str] = None
    status: Optional[str] = None

    class Config:
        extra = "forbid"


class ComingOut(BaseModel):
    id: str
    increment_id: str
    branch_id: str
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
