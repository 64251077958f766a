"""Exception handlers mapping failures onto ErrorResponse bodies.

- HTTPException (404 not found and friends) -> {"error", "message"}
- RequestValidationError -> 400 with field level details
- SQLAlchemyError -> 500 with a generic message; the cause is logged only
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from registry_api.core.metrics import observe_storage_error
from registry_api.core.structured_logging import log_json
from registry_api.schemas.errors import ErrorResponse

logger = logging.getLogger(__name__)

_ERROR_CODES = {
    status.HTTP_400_BAD_REQUEST: "bad_request",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
}


def _error_body(error: str, message: str, details: list[dict] | None = None) -> dict:
    return ErrorResponse(error=error, message=message, details=details).model_dump(
        exclude_none=True
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(_ERROR_CODES.get(exc.status_code, "http_error"), str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    log_json(
        logger,
        logging.INFO,
        "validation_error",
        path=request.url.path,
        fields=[d["field"] for d in details],
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("validation_error", "Request validation failed", details),
    )


async def storage_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    observe_storage_error(exc)
    log_json(
        logger,
        logging.ERROR,
        "storage_error",
        method=request.method,
        path=request.url.path,
        exception=exc.__class__.__name__,
        error=str(getattr(exc, "orig", None) or exc),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("storage_error", "A storage error occurred"),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register the API's exception handlers on the app."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, storage_exception_handler)
