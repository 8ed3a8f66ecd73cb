from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from market.config import settings
from market import exceptions


class Response(BaseModel):
    status: int
    description: str
    data: Any = None


def handle_response(status_code: int, data: Any = None) -> JSONResponse:
    """Wrap ``data`` in the {status, description, data} envelope."""
    if status_code < 400:
        description = "success"
    else:
        description = "error"
        logger.error(f"error while: status={status_code} data={data}")
        if status_code == 500:
            data = "Internal Server Error"

    body = Response(status=status_code, description=description, data=jsonable_encoder(data))
    return JSONResponse(status_code=status_code, content=body.model_dump())


def status_for(exc: exceptions.MarketError) -> int:
    if isinstance(exc, (exceptions.ValidationError, exceptions.NotFound)):
        return 400
    if isinstance(exc, exceptions.BusinessRuleError):
        return settings.BUSINESS_RULE_STATUS
    if isinstance(exc, exceptions.OperationTimeout):
        return 504
    return 500


# ================= EXCEPTION HANDLERS =================

async def market_error_handler(request: Request, exc: exceptions.MarketError):
    if exc.detail:
        logger.warning(f"{request.method} {request.url.path}: {exc}")
    return handle_response(status_for(exc), exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    # the rejected input itself may not be JSON-encodable (inf, nan)
    errors = [{"loc": e["loc"], "msg": e["msg"], "type": e["type"]} for e in exc.errors()]
    return handle_response(400, errors)


async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"{request.method} {request.url.path}: store failure")
    return handle_response(500, str(exc))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"{request.method} {request.url.path}: unhandled error")
    return handle_response(500, repr(exc))


def register_exception_handlers(app):
    app.add_exception_handler(exceptions.MarketError, market_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
