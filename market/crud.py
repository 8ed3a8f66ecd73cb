"""
Generic create/get/list/update/delete service shared by every entity.

Entity packages instantiate CRUDService for the plain operations and write
their own functions only where an operation carries business rules.
"""
import uuid

from pydantic import BaseModel
from sqlalchemy import or_
from sqlalchemy.orm import Session

from market.database import unit_of_work
from market.deadline import Deadline
from market.exceptions import NotFound, ValidationError


def parse_id(value: str) -> str:
    try:
        return str(uuid.UUID(value))
    except (TypeError, ValueError):
        raise ValidationError("id is not uuid", detail=repr(value))


class CRUDService:

    def __init__(self, model, search_fields=(), not_found=NotFound):
        self.model = model
        self.search_fields = search_fields
        self.not_found = not_found

    # ================= CREATE =================
    def create(self, db: Session, data: BaseModel, deadline: Deadline | None = None):
        obj = self.model(**data.model_dump())
        with unit_of_work(db, deadline):
            db.add(obj)
        db.refresh(obj)
        return obj

    # ================= READ =================
    def get(self, db: Session, obj_id: str, for_update: bool = False):
        query = db.query(self.model).filter(self.model.id == parse_id(obj_id))
        if for_update:
            query = query.with_for_update().populate_existing()
        obj = query.first()
        if obj is None:
            raise self.not_found(obj_id)
        return obj

    # ================= LIST =================
    def list(
        self,
        db: Session,
        limit: int = 10,
        offset: int = 0,
        search: str | None = None,
    ):
        query = db.query(self.model)

        if search and self.search_fields:
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(*(getattr(self.model, f).ilike(pattern) for f in self.search_fields))
            )

        count = query.count()
        items = (
            query
            .order_by(self.model.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return count, items

    # ================= UPDATE =================
    def update(self, db: Session, obj_id: str, data: BaseModel, deadline: Deadline | None = None):
        with unit_of_work(db, deadline):
            obj = self.get(db, obj_id, for_update=True)
            for key, value in data.model_dump(exclude_unset=True).items():
                setattr(obj, key, value)
        db.refresh(obj)
        return obj

    # ================= DELETE =================
    def delete(self, db: Session, obj_id: str, deadline: Deadline | None = None):
        with unit_of_work(db, deadline):
            obj = self.get(db, obj_id)
            db.delete(obj)
