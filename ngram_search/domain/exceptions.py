"""Domain exceptions for n-gram search.

Raised at the predicate-building and configuration boundaries, before any
SQL fragment is emitted. Callers map them to their own error responses.
"""

from typing import Any


class SearchException(Exception):
    """Base exception for all search errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, record_type).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationException(SearchException):
    """Raised when a record type lacks search configuration or is not searchable."""

    def __init__(self, message: str, record_type: type | str | None = None) -> None:
        """Initialize with message and the offending record type, if any.

        Args:
            message: Description of the configuration problem.
            record_type: Record class (or its name) that failed.
        """
        details: dict[str, Any] = {}
        if record_type is not None:
            details["record_type"] = (
                record_type if isinstance(record_type, str) else record_type.__name__
            )
        super().__init__(message, "CONFIGURATION_ERROR", details)


class InvalidInputException(SearchException):
    """Raised when caller input cannot be embedded safely into a query fragment."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or argument that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "INVALID_INPUT", details)


class SqlNotConfiguredException(SearchException):
    """Raised when a database session is requested but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            "SQL database not configured. Set DATABASE_URL.",
            "SQL_NOT_CONFIGURED",
        )


class RecordNotFoundException(SearchException):
    """Raised when a record to update does not exist."""

    def __init__(self, record_type: str, record_id: str) -> None:
        """Initialize with record type and id.

        Args:
            record_type: Model class name (e.g. 'Article').
            record_id: The primary key that was not found.
        """
        super().__init__(
            f"{record_type} not found: {record_id}",
            "RECORD_NOT_FOUND",
            {"record_type": record_type, "record_id": record_id},
        )
