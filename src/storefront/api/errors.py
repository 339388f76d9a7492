"""Translate domain failures into ``{"error": message}`` JSON responses."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError

from storefront.exceptions import AuthenticationError, first_message
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return _error(400, first_message(exc))


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return _error(400, message)


async def handle_authentication_error(request: Request, exc: AuthenticationError) -> JSONResponse:
    logger.info("authentication_failed", path=request.url.path, reason=exc.reason)
    return _error(401, "Authentication failed")


async def handle_not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return _error(404, "Resource not found")


async def handle_version_conflict(request: Request, exc: ExpectedVersionError) -> JSONResponse:
    logger.warning("concurrent_update_rejected", path=request.url.path)
    return _error(409, "Stock changed during checkout, please retry")


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path)
    return _error(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(AuthenticationError, handle_authentication_error)
    app.add_exception_handler(ObjectNotFoundError, handle_not_found)
    app.add_exception_handler(ExpectedVersionError, handle_version_conflict)
    app.add_exception_handler(Exception, handle_unexpected_error)
