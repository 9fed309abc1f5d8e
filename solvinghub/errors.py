from typing import Any, Dict, List, Optional, Union

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from solvinghub.config import Config, logger


# Custom exceptions
class AppException(Exception):
    """Base exception for application-specific errors."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        details: Optional[Union[str, Dict[str, Any], List[Any]]] = None,
    ):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail
        self.details = details


class DatabaseException(AppException):
    """Exception for database-related errors."""

    def __init__(self, detail: str = "Database error occurred", details: Any = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            details=details,
        )


class ConfigurationException(AppException):
    """Raised before any query when the service is missing required settings."""

    def __init__(self, detail: str = "Server configuration error", details: Any = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            details=details,
        )


class AuthenticationException(AppException):
    """Exception for authentication-related errors."""

    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class AuthorizationException(AppException):
    """Exception for authorization-related errors."""

    def __init__(self, detail: str = "Forbidden"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class ResourceNotFoundException(AppException):
    """Exception for resource not found errors."""

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictException(AppException):
    def __init__(self, detail: str = "Duplicate entry"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ValidationException(AppException):
    """Exception for validation errors."""

    def __init__(self, detail: str = "Validation failed", details: Any = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST, detail=detail, details=details
        )


class BadRequestException(AppException):
    """Exception for bad request errors."""

    def __init__(self, detail: str = "Bad request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


# Postgres SQLSTATE codes surfaced by integrity errors
INTEGRITY_ERROR_MAP = {
    "23505": ("Duplicate entry", status.HTTP_409_CONFLICT),
    "23503": ("Referenced record not found", status.HTTP_400_BAD_REQUEST),
    "23514": ("Data validation failed", status.HTTP_400_BAD_REQUEST),
}


def error_body(message: str, details: Any = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": message}
    if details is not None:
        body["details"] = details
    return body


def internal_details(exc: Exception) -> Optional[str]:
    """Error text for 5xx responses; hidden in production."""
    if Config.IS_PRODUCTION:
        return None
    return str(exc)


def format_validation_errors(errors) -> List[Dict[str, Any]]:
    formatted = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        formatted.append(
            {
                "field": ".".join(loc),
                "message": error.get("msg", ""),
                "code": error.get("type", ""),
            }
        )
    return formatted


def sqlstate_of(exc: IntegrityError) -> Optional[str]:
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code:
        return str(code)
    message = str(orig or exc).upper()
    if "UNIQUE" in message:
        return "23505"
    if "FOREIGN KEY" in message:
        return "23503"
    if "CHECK CONSTRAINT" in message:
        return "23514"
    return None


# Exception handlers
async def app_exception_handler(request: Request, exc: AppException):
    """Handler for application-specific exceptions."""
    logger.error(f"Application error: {exc.detail} (Status: {exc.status_code})")
    details = exc.details
    if exc.status_code >= 500 and Config.IS_PRODUCTION:
        details = None
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail, details),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    formatted_errors = format_validation_errors(exc.errors())
    logger.info(f"Request validation failed: {formatted_errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation failed", formatted_errors),
    )


async def pydantic_validation_exception_handler(request: Request, exc: ValidationError):
    """Handler for Pydantic validation errors."""
    errors = format_validation_errors(exc.errors())
    logger.error(f"Pydantic validation error: {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation failed", errors),
    )


async def integrity_exception_handler(request: Request, exc: IntegrityError):
    code = sqlstate_of(exc)
    logger.error(f"Integrity error ({code}): {str(exc)}")
    if code in INTEGRITY_ERROR_MAP:
        message, status_code = INTEGRITY_ERROR_MAP[code]
        return JSONResponse(
            status_code=status_code,
            content={"error": message, "code": code},
        )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Database error occurred", internal_details(exc)),
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handler for SQLAlchemy errors."""
    logger.error(f"Database error: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Database error occurred", internal_details(exc)),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handler for all other exceptions."""
    logger.error(f"Unexpected error: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error", internal_details(exc)),
    )


# Function to register exception handlers with FastAPI app
def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI application."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, pydantic_validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Exception handlers registered")
