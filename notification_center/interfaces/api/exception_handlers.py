"""Render every error response with the console's error envelope."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def _error_response(
    request: Request,
    status_code: int,
    message: str,
    *,
    fields: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    details: dict[str, Any] = {"statusCode": status_code}
    if fields:
        details["fields"] = fields
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(
            {
                "success": False,
                "error": {"message": message, "details": details},
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "path": request.url.path,
                "method": request.method,
            }
        ),
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail
    fields = None
    if isinstance(detail, dict):
        fields = detail.get("fields") or None
        detail = detail.get("message", "Request failed")
    if exc.status_code >= 400 and exc.status_code != status.HTTP_404_NOT_FOUND:
        logger.warning("%s %s rejected with %s: %s", request.method, request.url.path, exc.status_code, detail)
    return _error_response(
        request,
        exc.status_code,
        str(detail),
        fields=fields,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields: dict[str, str] = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        fields[".".join(location) or "request"] = error.get("msg", "Invalid value")
    return _error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "Validation Error",
        fields=fields,
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Storage failure while handling %s %s", request.method, request.url.path)
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error envelope handlers to ``app``."""

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)


__all__ = ["register_exception_handlers"]
