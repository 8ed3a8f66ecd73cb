from loguru import logger
from sqlalchemy.orm import Session

from market.branch.service import branches
from market.crud import CRUDService
from market.database import unit_of_work
from market.deadline import Deadline
from market.exceptions import NoSuchComing, ValidationError
from market.remainder import service as ledger
from market.sequence import COMING_PREFIX, next_increment

from . import schemas
from .models import Coming

comings = CRUDService(Coming, search_fields=("increment_id", "status"), not_found=NoSuchComing)


def create_coming(db: Session, data: schemas.ComingCreate, deadline: Deadline | None = None):
    with unit_of_work(db, deadline):
        branches.get(db, data.branch_id)

        coming = Coming(
            increment_id=COMING_PREFIX + next_increment(db, Coming),
            branch_id=data.branch_id,
        )
        db.add(coming)

    db.refresh(coming)
    logger.info(f"coming {coming.increment_id} opened at branch {coming.branch_id}")
    return coming


def update_coming(db: Session, coming_id: str, data: schemas.ComingUpdate, deadline: Deadline | None = None):
    with unit_of_work(db, deadline):
        coming = comings.get(db, coming_id, for_update=True)

        if data.branch_id is not None and data.branch_id != coming.branch_id:
            if coming.picking_list:
                raise ValidationError("coming already has received goods; branch cannot change")
            branches.get(db, data.branch_id)
            coming.branch_id = data.branch_id
        if data.status is not None:
            coming.status = data.status

    db.refresh(coming)
    return coming


def get_by_increment_id(db: Session, increment_id: str) -> Coming:
    coming = db.query(Coming).filter(Coming.increment_id == increment_id).first()
    if not coming:
        raise NoSuchComing(increment_id)
    return coming


def delete_coming(db: Session, coming_id: str, deadline: Deadline | None = None):
    """Delete a coming with its picking list, taking the received goods back off the ledger."""
    with unit_of_work(db, deadline):
        coming = comings.get(db, coming_id, for_update=True)
        increment_id = coming.increment_id
        for entry in coming.picking_list:
            if entry.product_id:
                ledger.deduct(db, entry.product_id, coming.branch_id, entry.quantity)
        db.delete(coming)
    logger.info(f"coming {increment_id} deleted")
