from market.routing import crud_router

from . import schemas, service

router = crud_router(
    service.comings,
    create_schema=schemas.ComingCreate,
    update_schema=schemas.ComingUpdate,
    out_schema=schemas.ComingOut,
    list_key="comings",
    create=service.create_coming,
    update=service.update_coming,
    delete=service.delete_coming,
)
