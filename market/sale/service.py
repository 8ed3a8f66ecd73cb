import math

from loguru import logger
from sqlalchemy.orm import Session

from market.branch.service import branches
from market.client.service import clients
from market.crud import CRUDService
from market.database import unit_of_work
from market.deadline import Deadline
from market.exceptions import InsufficientPayment, NoSuchSale, ValidationError
from market.remainder import service as ledger
from market.sequence import SALE_PREFIX, next_increment

from . import schemas
from .models import Sale
from .payment import PaymentPolicy, default_policy

sales = CRUDService(Sale, search_fields=("increment_id",), not_found=NoSuchSale)


def create_sale(db: Session, data: schemas.SaleCreate, deadline: Deadline | None = None):
    """Open an empty sale; its number is drawn in the same transaction as the insert."""
    with unit_of_work(db, deadline):
        branches.get(db, data.branch_id)
        if data.client_id:
            clients.get(db, data.client_id)

        sale = Sale(
            increment_id=SALE_PREFIX + next_increment(db, Sale),
            branch_id=data.branch_id,
            client_id=data.client_id,
            total_price=0,
            paid=0,
            debt=0,
        )
        db.add(sale)

    db.refresh(sale)
    logger.info(f"sale {sale.increment_id} opened at branch {sale.branch_id}")
    return sale


def update_sale(db: Session, sale_id: str, data: schemas.SaleUpdate, deadline: Deadline | None = None):
    with unit_of_work(db, deadline):
        sale = sales.get(db, sale_id, for_update=True)
        if "client_id" in data.model_fields_set:
            if data.client_id:
                clients.get(db, data.client_id)
            sale.client_id = data.client_id

    db.refresh(sale)
    return sale


def delete_sale(db: Session, sale_id: str, deadline: Deadline | None = None):
    """Delete a sale and its line items, returning their quantities to the ledger."""
    with unit_of_work(db, deadline):
        sale = sales.get(db, sale_id, for_update=True)
        increment_id = sale.increment_id

        for item in sale.items:
            ledger.restore(db, item.product_id, sale.branch_id, item.quantity)

        db.delete(sale)

    logger.info(f"sale {increment_id} deleted")


def get_by_increment_id(db: Session, increment_id: str, for_update: bool = False) -> Sale:
    query = db.query(Sale).filter(Sale.increment_id == increment_id)
    if for_update:
        query = query.with_for_update().populate_existing()
    sale = query.first()
    if not sale:
        raise NoSuchSale(increment_id)
    return sale


# -------------------------
# Payment
# -------------------------
def record_payment(
    db: Session,
    sale_increment_id: str,
    amount: float,
    policy: PaymentPolicy = default_policy,
    deadline: Deadline | None = None,
):
    if not math.isfinite(amount):
        raise ValidationError("money must be a finite number", detail=repr(amount))

    with unit_of_work(db, deadline):
        sale = get_by_increment_id(db, sale_increment_id, for_update=True)

        try:
            paid, debt = policy.settle(sale.total_price, sale.paid, amount)
        except InsufficientPayment:
            logger.warning(f"payment of {amount} rejected for sale {sale_increment_id} (total {sale.total_price})")
            raise

        sale.paid = paid
        sale.debt = debt

    db.refresh(sale)
    logger.info(f"payment of {amount} accepted for sale {sale_increment_id}: debt {sale.debt}")
    return sale
