from market.routing import crud_router

from . import schemas
from .service import products

router = crud_router(
    products,
    create_schema=schemas.ProductCreate,
    update_schema=schemas.ProductUpdate,
    out_schema=schemas.ProductOut,
    list_key="products",
)
