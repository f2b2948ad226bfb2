"""Domain exceptions that represent business rule violations."""

from typing import Optional


class DomainException(Exception):
    """Base exception for all domain-related errors."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


# Validation Domain Exceptions
class ValidationException(DomainException):
    """Base exception for validation errors."""


class InvalidArgument(ValidationException):
    """Malformed or out-of-range input."""

    def __init__(self, message: str):
        super().__init__(message, "INVALID_ARGUMENT")


# Geo Domain Exceptions
class GeoException(DomainException):
    """Base exception for city and department errors."""


class NotFound(GeoException):
    """Requested entity does not exist."""

    def __init__(self, entity_type: str, field: str, value):
        super().__init__(
            f"{entity_type} not found with {field}: {value}", "NOT_FOUND"
        )


class CityNotFound(NotFound):
    """City not found in the system."""

    def __init__(self, field: str, value):
        super().__init__("City", field, value)
        self.error_code = "CITY_NOT_FOUND"


class DepartmentNotFound(NotFound):
    """Department not found in the system."""

    def __init__(self, field: str, value):
        super().__init__("Department", field, value)
        self.error_code = "DEPARTMENT_NOT_FOUND"


class DuplicateKey(GeoException):
    """Uniqueness violation on a city name or department code."""

    def __init__(self, entity_type: str, field: str, value: str):
        super().__init__(
            f"{entity_type} with {field} '{value}' already exists",
            "DUPLICATE_KEY",
        )


class Conflict(GeoException):
    """Operation conflicts with the current state of the store."""

    def __init__(self, entity_type: str, reason: str):
        super().__init__(f"{entity_type} conflict: {reason}", "CONFLICT")


class DepartmentHasCities(Conflict):
    """Department cannot be deleted while cities still reference it."""

    def __init__(self, department_id: int, city_count: int):
        super().__init__(
            "Department",
            f"department {department_id} still has {city_count} "
            f"cit{'y' if city_count == 1 else 'ies'}",
        )
        self.error_code = "DEPARTMENT_HAS_CITIES"


# Export Domain Exceptions
class ExportException(DomainException):
    """Base exception for export errors."""


class ExportFailure(ExportException):
    """I/O or serialization error while generating an export."""

    def __init__(self, export_format: str, reason: str):
        super().__init__(
            f"{export_format} export failed: {reason}", "EXPORT_FAILURE"
        )
