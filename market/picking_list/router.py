from market.routing import crud_router

from . import schemas, service

router = crud_router(
    service.picking_lists,
    create_schema=schemas.PickingListCreate,
    update_schema=schemas.PickingListUpdate,
    out_schema=schemas.PickingListOut,
    list_key="picking_list",
    create=service.create_picking_list,
    update=service.update_picking_list,
    delete=service.delete_picking_list,
)
