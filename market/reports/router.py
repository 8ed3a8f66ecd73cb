from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from market.client.schemas import ClientOut
from market.database import get_db
from market.responses import handle_response

from . import schemas, service

router = APIRouter()


@router.get("/branch_doc")
def get_branch_doc(
    branch_id: str = Query(..., description="Branch id"),
    db: Session = Depends(get_db),
):
    doc = service.branch_doc(db, branch_id)
    return handle_response(200, schemas.BranchDoc(**doc))


@router.get("/registration")
def get_registration(
    from_date: date = Query(..., alias="from", description="YYYY-MM-DD, exclusive"),
    to_date: date = Query(..., alias="to", description="YYYY-MM-DD, exclusive"),
    db: Session = Depends(get_db),
):
    """Clients registered strictly between the two days."""
    clients = service.registration_report(db, from_date, to_date)
    return handle_response(200, [ClientOut.model_validate(c) for c in clients])
