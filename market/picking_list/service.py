from loguru import logger
from sqlalchemy.orm import Session

from market.coming.service import get_by_increment_id
from market.crud import CRUDService
from market.database import unit_of_work
from market.deadline import Deadline
from market.product.service import products
from market.remainder import service as ledger

from . import schemas
from .models import PickingList

picking_lists = CRUDService(PickingList, search_fields=("coming_increment_id",))


def create_picking_list(db: Session, data: schemas.PickingListCreate, deadline: Deadline | None = None):
    """
    Record goods received under a coming and add them to the branch's ledger.
    The entry and the ledger upsert commit together.
    """
    with unit_of_work(db, deadline) as deadline:
        coming = get_by_increment_id(db, data.coming_increment_id)
        product = products.get(db, data.product_id)

        entry = PickingList(
            product_id=product.id,
            quantity=data.quantity,
            price=data.price,
            total_price=data.quantity * data.price,
            coming_id=coming.id,
            coming_increment_id=coming.increment_id,
        )
        db.add(entry)

        deadline.check("picking list insert")
        ledger.receive(
            db,
            product_id=product.id,
            branch_id=coming.branch_id,
            quantity=data.quantity,
            coming_price=data.price,
            sale_price=product.price,
            name=product.name,
        )

    db.refresh(entry)
    logger.info(
        f"picking list {entry.id}: {entry.quantity} x {entry.product_id} "
        f"received under {entry.coming_increment_id}"
    )
    return entry


def update_picking_list(
    db: Session,
    entry_id: str,
    data: schemas.PickingListUpdate,
    deadline: Deadline | None = None,
):
    with unit_of_work(db, deadline):
        entry = picking_lists.get(db, entry_id, for_update=True)
        branch_id = entry.coming.branch_id

        if data.quantity is not None and data.quantity != entry.quantity:
            delta = data.quantity - entry.quantity
            if delta > 0:
                product = products.get(db, entry.product_id)
                ledger.receive(db, product.id, branch_id, delta, entry.price, product.price, product.name)
            else:
                ledger.deduct(db, entry.product_id, branch_id, -delta)
            entry.quantity = data.quantity

        if data.price is not None:
            entry.price = data.price

        entry.total_price = entry.quantity * entry.price

    db.refresh(entry)
    return entry


def delete_picking_list(db: Session, entry_id: str, deadline: Deadline | None = None):
    with unit_of_work(db, deadline):
        entry = picking_lists.get(db, entry_id, for_update=True)
        # goods already sold cannot be un-received
        if entry.product_id:
            ledger.deduct(db, entry.product_id, entry.coming.branch_id, entry.quantity)
        db.delete(entry)
