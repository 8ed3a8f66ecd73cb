from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from market.database import get_db
from market.responses import handle_response
from market.routing import crud_router

from . import schemas, service
from .payment import PaymentPolicy, get_payment_policy

router = crud_router(
    service.sales,
    create_schema=schemas.SaleCreate,
    update_schema=schemas.SaleUpdate,
    out_schema=schemas.SaleOut,
    list_key="sales",
    create=service.create_sale,
    update=service.update_sale,
    delete=service.delete_sale,
)

payment_router = APIRouter()


@payment_router.put("/make_pay", status_code=202)
def make_pay(
    sale_id: str = Query(..., description="Sale increment id, e.g. S-0000001"),
    money: float = Query(..., description="Amount paid", allow_inf_nan=False),
    db: Session = Depends(get_db),
    policy: PaymentPolicy = Depends(get_payment_policy),
):
    """
    Record a payment against a sale.
    The amount replaces any earlier payment and must exceed half of the total.
    """
    service.record_payment(db, sale_id, money, policy=policy)
    return handle_response(202, "successful payment")
