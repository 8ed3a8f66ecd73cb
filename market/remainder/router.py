from market.routing import crud_router

from . import schemas, service

router = crud_router(
    service.remainders,
    create_schema=schemas.RemainderCreate,
    update_schema=schemas.RemainderUpdate,
    out_schema=schemas.RemainderOut,
    list_key="remainders",
    create=service.create_remainder,
)
