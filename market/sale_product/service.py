"""
Sale line items.

Every write here touches three things in one transaction: the stock ledger,
the line item and the parent sale's running total. A failure at any step
leaves all three untouched.
"""
from loguru import logger
from sqlalchemy import update
from sqlalchemy.orm import Session

from market.crud import CRUDService
from market.database import unit_of_work, utcnow
from market.deadline import Deadline
from market.remainder import service as ledger
from market.sale.models import Sale, SaleProduct
from market.sale.service import sales

from . import schemas

sale_products = CRUDService(SaleProduct, search_fields=("sale_increment_id",))


def _add_to_sale_total(db: Session, sale: Sale, amount: float):
    # single statement, so concurrent items on one sale cannot lose an update
    db.execute(
        update(Sale)
        .where(Sale.id == sale.id)
        .values(
            total_price=Sale.total_price + amount,
            debt=Sale.debt + amount,
            updated_at=utcnow(),
        )
        .execution_options(synchronize_session=False)
    )
    db.expire(sale)


# ============================================================
# ADD ITEM TO EXISTING SALE
# ============================================================
def create_line_item(db: Session, data: schemas.SaleProductCreate, deadline: Deadline | None = None):
    """
    Deduct stock at the sale's branch, price the item from the product's
    current price and add the item total to the sale.
    """
    with unit_of_work(db, deadline) as deadline:
        sale = sales.get(db, data.sale_id, for_update=True)

        unit_price = ledger.deduct(db, data.product_id, sale.branch_id, data.quantity)
        deadline.check("stock deduction")

        total_price = data.quantity * unit_price
        item = SaleProduct(
            product_id=data.product_id,
            sale_id=sale.id,
            sale_increment_id=sale.increment_id,
            quantity=data.quantity,
            price=unit_price,
            total_price=total_price,
        )
        db.add(item)

        _add_to_sale_total(db, sale, total_price)

    db.refresh(item)
    logger.info(
        f"sale {item.sale_increment_id}: +{item.quantity} x {item.product_id} "
        f"@ {item.price} = {item.total_price}"
    )
    return item


def update_line_item(
    db: Session,
    item_id: str,
    data: schemas.SaleProductUpdate,
    deadline: Deadline | None = None,
):
    """Change an item's quantity; stock and the sale total move by the difference at the original price."""
    with unit_of_work(db, deadline):
        item = sale_products.get(db, item_id, for_update=True)
        sale = sales.get(db, item.sale_id, for_update=True)

        delta = data.quantity - item.quantity
        if delta > 0:
            ledger.deduct(db, item.product_id, sale.branch_id, delta)
        elif delta < 0:
            ledger.restore(db, item.product_id, sale.branch_id, -delta)

        item.quantity = data.quantity
        item.total_price = data.quantity * item.price

        if delta:
            _add_to_sale_total(db, sale, delta * item.price)

    db.refresh(item)
    return item


def delete_line_item(db: Session, item_id: str, deadline: Deadline | None = None):
    with unit_of_work(db, deadline):
        item = sale_products.get(db, item_id, for_update=True)
        sale = sales.get(db, item.sale_id, for_update=True)

        ledger.restore(db, item.product_id, sale.branch_id, item.quantity)
        _add_to_sale_total(db, sale, -item.total_price)
        db.delete(item)
