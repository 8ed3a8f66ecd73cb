from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from market.config import settings
from market.crud import CRUDService
from market.database import get_db
from market.responses import handle_response


def crud_router(
    service: CRUDService,
    *,
    create_schema,
    update_schema,
    out_schema,
    list_key: str,
    create=None,
    update=None,
    delete=None,
) -> APIRouter:
    """
    Build the five standard endpoints of one entity.

    ``create``/``update``/``delete`` replace the generic service call for
    entities whose writes carry business rules; they take the same arguments.
    """
    create = create or service.create
    update = update or service.update
    delete = delete or service.delete

    router = APIRouter()

    # ================= CREATE =================
    @router.post("", status_code=201)
    def create_endpoint(payload: create_schema, db: Session = Depends(get_db)):
        obj = create(db, payload)
        return handle_response(201, out_schema.model_validate(obj))

    # ================= GET =================
    @router.get("/{obj_id}")
    def get_endpoint(obj_id: str, db: Session = Depends(get_db)):
        return handle_response(200, out_schema.model_validate(service.get(db, obj_id)))

    # ================= LIST =================
    @router.get("")
    def list_endpoint(
        limit: int = Query(settings.DEFAULT_LIMIT, ge=0),
        offset: int = Query(0, ge=0),
        search: str | None = Query(None),
        db: Session = Depends(get_db),
    ):
        count, items = service.list(
            db,
            limit=limit or settings.DEFAULT_LIMIT,
            offset=offset,
            search=search,
        )
        return handle_response(200, {
            "count": count,
            list_key: [out_schema.model_validate(i) for i in items],
        })

    # ================= UPDATE =================
    @router.put("/{obj_id}", status_code=202)
    def update_endpoint(obj_id: str, payload: update_schema, db: Session = Depends(get_db)):
        obj = update(db, obj_id, payload)
        return handle_response(202, out_schema.model_validate(obj))

    # ================= DELETE =================
    @router.delete("/{obj_id}")
    def delete_endpoint(obj_id: str, db: Session = Depends(get_db)):
        delete(db, obj_id)
        return handle_response(200, "deleted")

    return router
