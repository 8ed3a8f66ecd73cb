from market.routing import crud_router

from . import schemas, service

router = crud_router(
    service.sale_products,
    create_schema=schemas.SaleProductCreate,
    update_schema=schemas.SaleProductUpdate,
    out_schema=schemas.SaleProductOut,
    list_key="sale_products",
    create=service.create_line_item,
    update=service.update_line_item,
    delete=service.delete_line_item,
)
