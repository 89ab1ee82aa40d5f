from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

logger = logging.getLogger(__name__)

# Request fields whose validation failures get a specific message
FIELD_MESSAGES = {
    "page": "Invalid pagination parameters",
    "limit": "Invalid pagination parameters",
    "sortBy": "Invalid sort field",
    "sortOrder": "Invalid sort order",
    "price": "Invalid price",
    "stockQuantity": "Invalid stock quantity",
    "status": "Invalid status",
}


def error_response(status_code: int, message: str, headers: dict = None) -> JSONResponse:
    """Build a failure envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers
    )


def validation_message(exc: RequestValidationError) -> str:
    """Pick a client-facing message for the first recognised field error."""
    for error in exc.errors():
        loc = error.get("loc", ())
        if len(loc) > 1 and loc[-1] in FIELD_MESSAGES:
            return FIELD_MESSAGES[loc[-1]]
    return "Invalid request"


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    message = validation_message(exc)
    logger.warning(f"Rejected {request.method} {request.url.path}: {message}")
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure in the {success, message} envelope."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
