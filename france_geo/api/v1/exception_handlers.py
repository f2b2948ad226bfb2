"""Exception handlers to translate domain exceptions to HTTP responses."""

from datetime import datetime, timezone
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from france_geo.domain.exceptions import (
    CityNotFound,
    Conflict,
    DepartmentHasCities,
    DepartmentNotFound,
    DomainException,
    DuplicateKey,
    ExportException,
    ExportFailure,
    GeoException,
    InvalidArgument,
    NotFound,
    ValidationException,
)
from france_geo.utils.logger import get_logger


logger = get_logger("exception_handlers")


class DomainExceptionHandler:
    """Centralized handler for domain exceptions."""

    # Mapping of domain exceptions to HTTP status codes
    EXCEPTION_STATUS_MAP = {
        # Validation exceptions
        InvalidArgument: status.HTTP_400_BAD_REQUEST,

        # Geo exceptions
        NotFound: status.HTTP_404_NOT_FOUND,
        CityNotFound: status.HTTP_404_NOT_FOUND,
        DepartmentNotFound: status.HTTP_404_NOT_FOUND,
        DuplicateKey: status.HTTP_400_BAD_REQUEST,
        Conflict: status.HTTP_409_CONFLICT,
        DepartmentHasCities: status.HTTP_409_CONFLICT,

        # Export exceptions
        ExportFailure: status.HTTP_500_INTERNAL_SERVER_ERROR,
    }

    # Base exception type status codes
    BASE_EXCEPTION_STATUS_MAP = {
        ValidationException: status.HTTP_400_BAD_REQUEST,
        GeoException: status.HTTP_400_BAD_REQUEST,
        ExportException: status.HTTP_500_INTERNAL_SERVER_ERROR,
    }

    @classmethod
    def status_for(cls, exc: DomainException) -> int:
        # Try to find specific exception mapping first
        status_code = cls.EXCEPTION_STATUS_MAP.get(type(exc))

        # Fall back to base exception type mapping
        if status_code is None:
            for base_type, base_status in cls.BASE_EXCEPTION_STATUS_MAP.items():
                if isinstance(exc, base_type):
                    status_code = base_status
                    break

        if status_code is None:
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        return status_code

    @staticmethod
    def error_body(
        status_code: int, message: str, path: str, error_code: str | None = None
    ) -> dict:
        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "status": status_code,
            "error": HTTPStatus(status_code).phrase,
            "message": message,
            "path": path,
            "error_code": error_code,
        }

    @classmethod
    def handle_domain_exception(
        cls, exc: DomainException, path: str
    ) -> JSONResponse:
        """Convert domain exception to a JSON error response."""
        status_code = cls.status_for(exc)
        if status_code >= 500:
            logger.error(f"{exc.__class__.__name__} on {path}: {exc.message}")
        else:
            logger.info(f"{exc.__class__.__name__} on {path}: {exc.message}")
        return JSONResponse(
            status_code=status_code,
            content=cls.error_body(status_code, exc.message, path, exc.error_code),
        )

    @classmethod
    def handle_validation_error(
        cls, exc: RequestValidationError, path: str
    ) -> JSONResponse:
        """One message per failing field, concatenated."""
        messages = []
        for error in exc.errors():
            field = ".".join(
                str(part) for part in error.get("loc", ()) if part != "body"
            )
            messages.append(f"{field}: {error.get('msg')}" if field else error.get("msg"))
        status_code = status.HTTP_400_BAD_REQUEST
        return JSONResponse(
            status_code=status_code,
            content=cls.error_body(
                status_code, "; ".join(messages), path, "VALIDATION_ERROR"
            ),
        )


async def domain_exception_handler(request: Request, exc: DomainException):
    return DomainExceptionHandler.handle_domain_exception(exc, request.url.path)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
):
    return DomainExceptionHandler.handle_validation_error(exc, request.url.path)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
