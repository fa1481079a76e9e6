"""
Error handling middleware for API

Exception handlers turn errors raised anywhere in a request into the flat
{"error", "message"} envelope:

- Validation errors (bad JSON, wrong path parameter types) -> 400
- Domain errors (command validation, strict credentials, bridge failures)
  -> their own status code
- Anything else -> 500
"""

from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from plunge.api.schemas.error import ErrorResponse
from plunge.models.enums import LogCategory
from plunge.utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)


class DomainError(Exception):
    """Base class for domain-specific errors"""
    def __init__(
        self,
        code: str,
        error: str,
        message: Optional[str] = None,
        status_code: int = 400
    ):
        self.code = code
        self.error = error
        self.message = message
        self.status_code = status_code
        super().__init__(message or error)


class CommandValidationError(DomainError):
    """Command input failed shape or range checks; device never contacted"""
    def __init__(self, error: str):
        super().__init__(
            code="VALIDATION_ERROR",
            error=error,
            status_code=400
        )


class InvalidCredentialsError(DomainError):
    """Malformed credential headers (strict mode only)"""
    def __init__(self, message: str):
        super().__init__(
            code="INVALID_CREDENTIALS",
            error="Invalid credentials",
            message=message,
            status_code=400
        )


class CommandFailedError(DomainError):
    """Bridge failure while talking to the controller"""
    def __init__(self, error: str, message: str):
        super().__init__(
            code="BRIDGE_FAILURE",
            error=error,
            message=message,
            status_code=500
        )


def error_response(status_code: int, error: str, message: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=error, message=message)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True)
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI app"""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle malformed JSON and path/query parameter errors"""
        problems = []
        for error in exc.errors():
            field = ".".join(str(x) for x in error["loc"][1:]) or str(error["loc"][0])
            problems.append(f"{field}: {error['msg']}")

        log.warn(
            f"Request validation failed: {request.method} {request.url.path}",
            errors=len(problems)
        )
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request", "; ".join(problems))

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError):
        log.warn(
            f"{exc.code}: {exc.error}",
            path=request.url.path,
            **({"detail": exc.message} if exc.message else {})
        )
        return error_response(exc.status_code, exc.error, exc.message)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        log.error(
            f"Unexpected error: {type(exc).__name__}: {exc}",
            path=request.url.path
        )
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
            str(exc) or type(exc).__name__
        )
