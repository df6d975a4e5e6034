import structlog
from fastapi import Request
from fastapi.responses import JSONResponse, Response

from helpdesk.errors import NotFoundError, UnauthorizedError

logger = structlog.get_logger(__name__)


def create_json_error_response(status_code: int, message: str, error_type: str | None = None) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"message": message}
    if error_type:
        content["type"] = error_type
    return JSONResponse(status_code=status_code, content=content)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle UserError subclasses raised by routes with appropriate status codes."""
    if isinstance(exc, UnauthorizedError):
        status_code = 401
        error_type = "unauthorized"
    elif isinstance(exc, NotFoundError):
        status_code = 404
        error_type = "not_found"
    else:
        # Default for any other UserError subclass
        status_code = 400
        error_type = "bad_request"

    return create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type)


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("unexpected_error", error_type=type(exc).__name__)
    return create_json_error_response(
        status_code=500, message="Something went wrong, please try again", error_type="internal_server_error"
    )
