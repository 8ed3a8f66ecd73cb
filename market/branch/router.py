from market.routing import crud_router

from . import schemas
from .service import branches

router = crud_router(
    branches,
    create_schema=schemas.BranchCreate,
    update_schema=schemas.BranchUpdate,
    out_schema=schemas.BranchOut,
    list_key="branches",
)
