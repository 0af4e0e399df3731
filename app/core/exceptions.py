from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import logging

from app.core.config import settings

logger = logging.getLogger("uvicorn.error")

class CustomHTTPException(Exception):
    """A custom HTTPException that we can use for additional context."""
    def __init__(self, status_code: int, detail: str, headers: dict = None):
        self.status_code = status_code
        self.detail = detail
        self.headers = headers
        super().__init__(detail)  # Initialize the base Exception with the detail message


def error_body(message: str, **extra) -> dict:
    """Build the `{"error": {"message": ...}}` envelope used by every error response."""
    return {"error": {"message": message, **extra}}


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle validation errors and return a structured JSON response."""
    logger.error(f"Validation error on {request.url}: {exc.errors()}")

    errors = exc.errors()
    # Sanitize un-serializable objects in ctx
    for error in errors:
        ctx = error.get("ctx")
        if ctx and isinstance(ctx.get("error"), Exception):
            ctx["error"] = str(ctx["error"])

    return JSONResponse(
        status_code=422,
        content=error_body("Validation failed. Please check your request data.", details=errors),
    )

async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Error envelope for CustomHTTPException and for Starlette's own
    HTTPException (unknown routes, wrong methods).
    """
    if isinstance(exc, CustomHTTPException):
        logger.error(f"Custom HTTP error on {request.url}: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.detail),
            headers=exc.headers or {},
        )

    logger.error(f"HTTP error on {request.url}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=exc.headers or {},
    )

async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: backend failures and anything else unhandled become a 500."""
    logger.exception(f"Unhandled error on {request.url}: {exc}")
    message = "server error" if settings.IS_PRODUCTION else str(exc) or exc.__class__.__name__
    return JSONResponse(
        status_code=500,
        content=error_body(message),
    )
