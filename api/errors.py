"""
Response envelope and exception handlers shared by all routes
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Any, Dict, Optional
import logging

from api.config import Settings
from api.services.task_store import TaskValidationError

logger = logging.getLogger(__name__)

TITLE_REQUIRED_MESSAGE = "Task title is required and must be a non-empty string"
INVALID_JSON_MESSAGE = "Invalid JSON in request body"

# Error types raised by our own request validators carry the final message
CUSTOM_ERROR_TYPES = {"title_required", "title_invalid", "title_too_long", "completed_invalid"}


def success_body(data: Any = None, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    body.update(extra)
    return body


def error_response(status_code: int, error: str, message: Optional[str] = None) -> JSONResponse:
    """Build the {"success": false, "error": ...} envelope"""
    content: Dict[str, Any] = {"success": False, "error": error}
    if message is not None:
        content["message"] = message
    return JSONResponse(status_code=status_code, content=content)


def request_target(request: Request) -> str:
    """Path plus query string, as the client sent it"""
    if request.url.query:
        return f"{request.url.path}?{request.url.query}"
    return request.url.path


def validation_message(exc: RequestValidationError) -> str:
    """Pick a client-facing message for the first request validation error"""
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    first = errors[0]
    error_type = first.get("type", "")

    if error_type in CUSTOM_ERROR_TYPES:
        return first["msg"]
    if error_type == "json_invalid":
        return INVALID_JSON_MESSAGE
    if error_type == "missing":
        # The only required input on any task route is the create title
        return TITLE_REQUIRED_MESSAGE
    return f"Invalid request body: {first.get('msg', 'unprocessable input')}"


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Map every failure kind to a status code and the error envelope"""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message = validation_message(exc)
        logger.info(f"⚠️ Rejected {request.method} {request_target(request)}: {message}")
        return error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(TaskValidationError)
    async def task_validation_handler(request: Request, exc: TaskValidationError):
        logger.info(f"⚠️ Rejected {request.method} {request_target(request)}: {exc}")
        return error_response(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return error_response(
                status.HTTP_404_NOT_FOUND,
                f"Route {request.method} {request_target(request)} not found"
            )
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"❌ Unhandled error on {request.method} {request_target(request)}: {exc}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
            message=str(exc) if settings.is_development else "Something went wrong"
        )
