"""
Stock ledger.

One Remainder row per (product, branch). Receipts (picking list) add to it,
sales deduct from it. Both paths lock the row and run inside the caller's
transaction; nothing here commits.
"""
from loguru import logger
from sqlalchemy import update
from sqlalchemy.orm import Session

from market.crud import CRUDService
from market.database import unit_of_work, utcnow
from market.deadline import Deadline
from market.exceptions import InsufficientStock, NoSuchProduct, ValidationError
from market.product.models import Product

from . import schemas
from .models import Remainder

remainders = CRUDService(Remainder, search_fields=("name",))


def get_remainder_orm(db: Session, product_id: str, branch_id: str, for_update: bool = False):
    query = db.query(Remainder).filter(
        Remainder.product_id == product_id,
        Remainder.branch_id == branch_id,
    )
    if for_update:
        query = query.with_for_update().populate_existing()
    return query.first()


def _get_product(db: Session, product_id: str) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise NoSuchProduct(product_id)
    return product


# --------------------------
# Internal: receive stock (picking list)
# --------------------------
def receive(
    db: Session,
    product_id: str,
    branch_id: str,
    quantity: int,
    coming_price: float,
    sale_price: float,
    name: str | None = None,
) -> Remainder:
    """
    Add ``quantity`` to the (product, branch) row, creating it on first receipt.

    An existing row takes the current sale_price and name; its coming_price stays
    the one from the first receipt (no cost averaging).
    """
    if quantity <= 0:
        raise ValidationError("quantity must be positive", detail=f"quantity={quantity}")

    remainder = get_remainder_orm(db, product_id, branch_id, for_update=True)

    if not remainder:
        remainder = Remainder(
            product_id=product_id,
            branch_id=branch_id,
            name=name,
            quantity=quantity,
            coming_price=coming_price,
            sale_price=sale_price,
        )
        db.add(remainder)
        logger.info(f"ledger: new row product={product_id} branch={branch_id} quantity={quantity}")
    else:
        remainder.quantity = Remainder.quantity + quantity
        remainder.sale_price = sale_price
        if name:
            remainder.name = name
        logger.info(f"ledger: +{quantity} product={product_id} branch={branch_id}")

    db.flush()
    return remainder


# --------------------------
# Internal: deduct stock (sale)
# --------------------------
def deduct(db: Session, product_id: str, branch_id: str, quantity: int) -> float:
    """
    Take ``quantity`` off the (product, branch) row and return the unit price
    to charge, which is the product's price right now.
    Taking exactly what is left is allowed and leaves the row at zero.
    """
    if quantity <= 0:
        raise ValidationError("quantity must be positive", detail=f"quantity={quantity}")

    product = _get_product(db, product_id)

    remainder = get_remainder_orm(db, product_id, branch_id, for_update=True)
    available = remainder.quantity if remainder else 0
    if not remainder or available < quantity:
        logger.warning(
            f"ledger: rejected -{quantity} product={product_id} "
            f"branch={branch_id} available={available}"
        )
        raise InsufficientStock(product_id, branch_id, quantity, available)

    result = db.execute(
        update(Remainder)
        .where(Remainder.id == remainder.id, Remainder.quantity >= quantity)
        .values(quantity=Remainder.quantity - quantity, updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise InsufficientStock(product_id, branch_id, quantity, available)

    db.expire(remainder)
    logger.info(f"ledger: -{quantity} product={product_id} branch={branch_id}")
    return product.price


# --------------------------
# Internal: return stock (line item removed or reduced)
# --------------------------
def restore(db: Session, product_id: str | None, branch_id: str, quantity: int):
    if not product_id or quantity <= 0:
        return

    remainder = get_remainder_orm(db, product_id, branch_id, for_update=True)
    if remainder:
        remainder.quantity = Remainder.quantity + quantity
    else:
        product = db.query(Product).filter(Product.id == product_id).first()
        if not product:
            return
        db.add(Remainder(
            product_id=product_id,
            branch_id=branch_id,
            name=product.name,
            quantity=quantity,
            sale_price=product.price,
        ))

    db.flush()
    logger.info(f"ledger: restored +{quantity} product={product_id} branch={branch_id}")


# ================= CRUD =================
def create_remainder(db: Session, data: schemas.RemainderCreate, deadline: Deadline | None = None):
    with unit_of_work(db, deadline):
        product = _get_product(db, data.product_id)

        if get_remainder_orm(db, data.product_id, data.branch_id):
            raise ValidationError(
                "remainder already exists for this product and branch",
                detail=f"product={data.product_id} branch={data.branch_id}",
            )

        remainder = Remainder(**data.model_dump(), name=product.name)
        db.add(remainder)

    db.refresh(remainder)
    return remainder
