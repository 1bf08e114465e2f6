"""Storefront error taxonomy and its HTTP rendering.

Every bounded context raises these errors (or Protean's own
``ValidationError`` / ``ObjectNotFoundError``); the FastAPI application maps
them onto status codes with ``register_error_handlers``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class StorefrontError(Exception):
    """Base class for errors that carry a stable kind and an HTTP status."""

    kind = "storefront_error"
    status_code = 400

    def __init__(self, message: str, errors: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors or {}

    def to_dict(self) -> dict:
        body = {"kind": self.kind, "message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class NotFound(StorefrontError):
    kind = "not_found"
    status_code = 404


class InvalidState(StorefrontError):
    kind = "invalid_state"
    status_code = 400


class InsufficientStock(StorefrontError):
    """Requested quantity exceeds what the catalogue can supply."""

    kind = "insufficient_stock"
    status_code = 400

    def __init__(self, message: str, product_id: str | None = None, requested: int | None = None) -> None:
        errors = {}
        if product_id is not None:
            errors["product_id"] = [str(product_id)]
        if requested is not None:
            errors["requested"] = [str(requested)]
        super().__init__(message, errors)
        self.product_id = product_id
        self.requested = requested


class Forbidden(StorefrontError):
    kind = "forbidden"
    status_code = 403


class DuplicateEntry(StorefrontError):
    kind = "duplicate_entry"
    status_code = 400


class ValidationFailure(StorefrontError):
    kind = "validation_failure"
    status_code = 400


class Unauthorized(StorefrontError):
    kind = "unauthorized"
    status_code = 401


class StoreUnavailable(StorefrontError):
    kind = "store_unavailable"
    status_code = 503


async def _storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    logger.info(
        "request_rejected",
        path=request.url.path,
        kind=exc.kind,
        message=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("request_invalid", path=request.url.path, errors=exc.messages)
    return JSONResponse(
        status_code=ValidationFailure.status_code,
        content={
            "kind": ValidationFailure.kind,
            "message": "Validation failed",
            "errors": exc.messages,
        },
    )


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part != "body") or "request"
        errors.setdefault(field, []).append(error["msg"])
    logger.info("request_invalid", path=request.url.path, errors=errors)
    return JSONResponse(
        status_code=ValidationFailure.status_code,
        content={"kind": ValidationFailure.kind, "message": "Validation failed", "errors": errors},
    )


async def _not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=NotFound.status_code,
        content={"kind": NotFound.kind, "message": "Resource not found"},
    )


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=500,
        content={"kind": "server_fault", "message": "Internal server error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach the storefront exception handlers to a FastAPI application."""
    app.add_exception_handler(StorefrontError, _storefront_error_handler)
    app.add_exception_handler(ValidationError, _validation_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(ObjectNotFoundError, _not_found_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)
