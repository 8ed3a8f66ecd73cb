from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from loguru import logger

from market.config import settings
from market.database import Base, engine
from market.responses import register_exception_handlers

from market.branch.router import router as branch_router
from market.client.router import router as client_router
from market.product.router import router as product_router
from market.remainder.router import router as remainder_router
from market.coming.router import router as coming_router
from market.picking_list.router import router as picking_list_router
from market.sale.router import router as sale_router, payment_router
from market.sale_product.router import router as sale_product_router
from market.reports.router import router as reports_router

import market.models  # noqa: F401


# Database startup
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.add(settings.LOG_FILE, rotation=settings.LOG_ROTATION, level=settings.LOG_LEVEL)
    logger.info("Application startup")
    Base.metadata.create_all(bind=engine)
    yield
    logger.info("Application shutdown")


# Create app
app = FastAPI(
    title="MARKET APP",
    description="An API for managing market operations including Branches, Stock, Sales, and Payments.",
    version="1.0.0",
    lifespan=lifespan
)

register_exception_handlers(app)

# Routers
app.include_router(branch_router, prefix="/branch", tags=["Branch"])
app.include_router(client_router, prefix="/client", tags=["Client"])
app.include_router(product_router, prefix="/product", tags=["Product"])
app.include_router(remainder_router, prefix="/remainder", tags=["Stock - Remainder"])
app.include_router(coming_router, prefix="/coming", tags=["Stock - Coming"])
app.include_router(picking_list_router, prefix="/picking_list", tags=["Stock - Picking List"])
app.include_router(sale_router, prefix="/sale", tags=["Sales"])
app.include_router(sale_product_router, prefix="/saleproduct", tags=["Sales - Products"])
app.include_router(payment_router, tags=["Payments"])
app.include_router(reports_router, tags=["Reports"])


@app.get("/health")
def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run("market.main:app", host=settings.SERVER_HOST, port=settings.SERVER_PORT)
