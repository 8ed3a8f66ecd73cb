from market.routing import crud_router

from . import schemas
from .service import clients

router = crud_router(
    clients,
    create_schema=schemas.ClientCreate,
    update_schema=schemas.ClientUpdate,
    out_schema=schemas.ClientOut,
    list_key="clients",
)
