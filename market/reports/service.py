from datetime import date, datetime, time, timedelta

import pytz
from sqlalchemy import func
from sqlalchemy.orm import Session

from market.branch.service import branches
from market.client.models import Client
from market.config import settings
from market.sale.models import Sale, SaleProduct


def _local_midnight_utc(day: date, tz) -> datetime:
    # created_at is stored as naive UTC
    local = tz.localize(datetime.combine(day, time.min))
    return local.astimezone(pytz.utc).replace(tzinfo=None)


def registration_report(db: Session, from_date: date, to_date: date, tz=None):
    """
    Clients whose registration day (in the configured timezone) lies strictly
    between ``from_date`` and ``to_date``. Both boundary days are excluded.
    """
    tz = tz or settings.tz

    first_day = from_date + timedelta(days=1)
    if first_day >= to_date:
        return []

    start = _local_midnight_utc(first_day, tz)
    end = _local_midnight_utc(to_date, tz)

    return (
        db.query(Client)
        .filter(Client.created_at >= start)
        .filter(Client.created_at < end)
        .order_by(Client.created_at.asc())
        .all()
    )


def branch_doc(db: Session, branch_id: str) -> dict:
    """
    Sales summary of one branch: total price of all its sales and the total
    quantity over the line items of all those sales.
    """
    branch = branches.get(db, branch_id)

    total_sale_price = (
        db.query(func.coalesce(func.sum(Sale.total_price), 0))
        .filter(Sale.branch_id == branch.id)
        .scalar()
    )

    total_sale_quantity = (
        db.query(func.coalesce(func.sum(SaleProduct.quantity), 0))
        .join(Sale, Sale.id == SaleProduct.sale_id)
        .filter(Sale.branch_id == branch.id)
        .scalar()
    )

    return {
        "branch_id": branch.id,
        "branch_name": branch.name,
        "total_sale_price": float(total_sale_price),
        "total_sale_quantity": int(total_sale_quantity),
    }
