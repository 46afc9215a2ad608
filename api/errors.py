"""Exception handlers that render every failure as ``{"error": message}``."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from analytics.exceptions import FeedbackAnalyticsError, ValidationError
from analytics.logging_config import get_logger

logger = get_logger("app")

NOT_FOUND_MESSAGE = "Not found"


def error_response(message: str, status_code: int = status.HTTP_400_BAD_REQUEST) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return "Invalid request: " + "; ".join(parts)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # A known path with the wrong method is still an unmatched route.
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return error_response(NOT_FOUND_MESSAGE, status.HTTP_404_NOT_FOUND)
    return error_response(str(exc.detail), exc.status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(_format_validation_errors(exc), status.HTTP_400_BAD_REQUEST)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return error_response(str(exc), status.HTTP_400_BAD_REQUEST)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response(
        f"Internal error: {str(exc) or 'Unknown'}",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def catch_unhandled_errors(request: Request, call_next):
    """Render unexpected failures here so the CORS layer still wraps the 500."""
    try:
        return await call_next(request)
    except Exception as exc:
        return await unhandled_exception_handler(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error handlers to an application."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(FeedbackAnalyticsError, unhandled_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
