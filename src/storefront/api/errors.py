"""HTTP mapping for the storefront error taxonomy.

Protean's own handlers cover the framework exceptions; the handlers added
here take precedence for our subclasses because Starlette resolves handlers
by the exception's MRO.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.shared.errors import (
    Conflict,
    Forbidden,
    InsufficientStock,
    Internal,
    InvalidArgument,
    InvalidState,
    NotFound,
    ProductUnavailable,
)

logger = structlog.get_logger(__name__)

_STATUS_BY_ERROR = {
    InvalidArgument: 400,
    InsufficientStock: 400,
    NotFound: 404,
    ProductUnavailable: 404,
    Forbidden: 403,
    InvalidState: 409,
    Conflict: 409,
    Internal: 500,
}


def _handler_for(status_code):
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        if status_code >= 500:
            logger.error("Request failed", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=status_code, content={"error": exc.messages})

    return handler


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    for error, status_code in _STATUS_BY_ERROR.items():
        app.add_exception_handler(error, _handler_for(status_code))
