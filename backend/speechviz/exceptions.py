import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from speechviz.errors import ErrorType, ERROR_STATUS_MAP

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Custom exception that services can raise.

    When ``payload`` is set the error is returned as a JSON body,
    otherwise ``message`` is returned as plain text.
    """

    def __init__(self, error_type: ErrorType, message: str, payload: dict[str, Any] | None = None):
        self.error_type = error_type
        self.message = message
        self.payload = payload
        super().__init__(message)


class QueryExecutionError(AppException):
    """The database rejected generated SQL. Carries the offending statement."""

    def __init__(self, message: str, sql_query: str, viz_type: str = "table"):
        self.sql_query = sql_query
        super().__init__(
            ErrorType.QUERY_EXECUTION,
            message,
            payload={
                "error": "SQL execution failed",
                "message": message,
                "sql_query": sql_query,
                "viz_type": viz_type,
            },
        )


async def app_exception_handler(_request: Request, exc: AppException) -> Response:
    """Global handler for AppException - converts to proper HTTP response."""
    status_code = ERROR_STATUS_MAP.get(exc.error_type, 500)
    if exc.payload is not None:
        return JSONResponse(status_code=status_code, content=exc.payload)
    return PlainTextResponse(exc.message, status_code=status_code)


async def generic_exception_handler(_request: Request, exc: Exception) -> Response:
    """Global handler for unhandled exceptions - returns 500."""
    logger.error(f"Unhandled exception: {exc}")
    return PlainTextResponse("Internal server error", status_code=500)


# Endpoint -> (message, returned as JSON {"error": message})
VALIDATION_MESSAGES = {
    "/process-transcription": ("Missing transcription or DB config", True),
    "/set-db-config": ("Incomplete DB config", False),
    "/schema-mermaid": ("Missing DB config", False),
    "/upload": ("No audio file uploaded", False),
}


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> Response:
    """Malformed request bodies get the same 400 response as missing fields."""
    message, as_json = VALIDATION_MESSAGES.get(request.url.path, ("Invalid request", False))
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    payload = {"error": message} if as_json else None
    return await app_exception_handler(request, AppException(ErrorType.INVALID_INPUT, message, payload))
