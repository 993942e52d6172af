"""
Error envelopes for the opname API.

Every failure leaves the service as an ``ErrorResponse``: a machine-readable
``error_code``, a message, a recovery hint, optional detail and the request
path. Domain errors keep their own code; request-schema failures become
``REQUEST_VALIDATION_ERROR``.
"""

from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from stockopname.application.dto.responses import ErrorResponse
from stockopname.config import get_logger
from stockopname.core.exceptions import (
    AuthError,
    ConstraintViolationError,
    InvalidStateError,
    NotFoundError,
    StockOpnameError,
    StorageError,
    ValidationError,
)

logger = get_logger(__name__)

# First match wins, so subclasses precede their bases
STATUS_BY_EXCEPTION: tuple[tuple[type[Exception], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidStateError, status.HTTP_409_CONFLICT),
    (ConstraintViolationError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthError, status.HTTP_401_UNAUTHORIZED),
    (StorageError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)

HINTS: dict[str, str] = {
    "SESSION_NOT_FOUND": "List a user's sessions with GET /api/users/{user_id}/sessions.",
    "LOCATION_NOT_FOUND": "List known locations with GET /api/locations.",
    "USER_NOT_FOUND": "Register the user first with POST /api/users.",
    "SESSION_NOT_ACTIVE": "The session is closed for counting. Open a new session to keep scanning.",
    "VALIDATION_ERROR": "Correct the named field and resend.",
    "CONSTRAINT_VIOLATION": "The value is already taken, or a referenced record does not exist.",
    "INVALID_CREDENTIALS": "Check the username and password.",
    "DATABASE_ERROR": "The database rejected the operation. See server logs.",
    "REQUEST_VALIDATION_ERROR": "Check the request body fields and types.",
}

FALLBACK_HINTS: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "Check the request parameters and body.",
    status.HTTP_401_UNAUTHORIZED: "Authentication failed.",
    status.HTTP_404_NOT_FOUND: "The requested resource was not found.",
    status.HTTP_405_METHOD_NOT_ALLOWED: "This method is not supported on the path.",
    status.HTTP_409_CONFLICT: "The request conflicts with the resource's current state.",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "An internal error occurred. See server logs.",
}

HTTP_ERROR_CODES: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "BAD_REQUEST",
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    status.HTTP_409_CONFLICT: "CONFLICT",
}


def status_for(exc: Exception) -> int:
    return next(
        (code for exc_type, code in STATUS_BY_EXCEPTION if isinstance(exc, exc_type)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def hint_for(error_code: str, status_code: int) -> str:
    return HINTS.get(error_code) or FALLBACK_HINTS.get(status_code, "")


def error_json(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    detail: str | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=hint_for(error_code, status_code),
        detail=detail,
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Envelope for a domain error or an unexpected exception."""
    status_code = status_for(exc)
    server_fault = status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR

    if isinstance(exc, StockOpnameError):
        error_code, message = exc.code, exc.message
        detail = "; ".join(f"{k}={v}" for k, v in exc.details.items() if v is not None) or None
    else:
        error_code, message, detail = type(exc).__name__, "Internal server error", None

    if not server_fault:
        log = logger.warning
    elif isinstance(exc, StockOpnameError):
        log = logger.error
    else:
        log = logger.exception
    log(
        "request_error",
        request_id=getattr(request.state, "request_id", None),
        path=request.url.path,
        status=status_code,
        error_code=error_code,
        error=str(exc),
    )
    return error_json(request, status_code, error_code, message, detail)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Catches whatever the registered exception handlers let through."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return build_error_response(request, exc)


def setup_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StockOpnameError)
    async def on_domain_error(request: Request, exc: StockOpnameError) -> JSONResponse:
        return build_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def on_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        problems = "; ".join(
            f"{' -> '.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return error_json(
            request,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "REQUEST_VALIDATION_ERROR",
            "Request validation failed",
            problems,
        )

    @app.exception_handler(HTTPException)
    async def on_http_error(request: Request, exc: HTTPException) -> JSONResponse:
        return error_json(
            request,
            exc.status_code,
            HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
            str(exc.detail) if exc.detail else "An error occurred",
        )
