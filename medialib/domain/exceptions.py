"""Domain exceptions for the media library service.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of transport concerns. The presentation
layer maps them to the error envelope in the exception handlers.
"""

from typing import Any


class MediaLibraryException(Exception):
    """Base exception for all media library errors.

    All custom exceptions inherit from this class so the presentation layer
    can map them uniformly using message, error_code, status_code and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code (e.g. 'not_found').
        details: Additional error context (e.g. field, resource_id).
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to 'server_error'.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or "server_error"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return message, status, code and details as a plain dict."""
        return {
            "message": self.message,
            "status": self.status_code,
            "code": self.error_code,
            "details": self.details,
        }


class ValidationException(MediaLibraryException):
    """Raised when input validation fails (missing or malformed field)."""

    status_code = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        error_code: str = "invalid_request",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
            error_code: Machine-readable code; 'invalid_request' unless more specific.
            details: Optional extra context merged with the field.
        """
        merged = dict(details or {})
        if field:
            merged["field"] = field
        super().__init__(message, error_code, merged)


class InvalidReferencesException(ValidationException):
    """Raised when a list of referenced ids (or names) contains unresolvable entries."""

    def __init__(self, error_code: str, label: str, invalid: list[str]) -> None:
        """Initialize with the code, a label for the message and the bad values.

        Args:
            error_code: e.g. 'invalid_media_ids', 'invalid_user_ids', 'invalid_tags'.
            label: Human-readable noun used in the message (e.g. 'media item IDs').
            invalid: The values that did not resolve.
        """
        super().__init__(
            f"Invalid {label}: {', '.join(invalid)}",
            error_code=error_code,
            details={"invalid": invalid},
        )


class ResourceNotFoundException(MediaLibraryException):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        error_code: str = "not_found",
    ) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'Folder', 'Media item').
            resource_id: The ID that was not found.
            error_code: 'not_found', or 'parent_not_found' for parent lookups.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            error_code,
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ConflictException(MediaLibraryException):
    """Raised when a constraint blocks the operation (in-use, duplicate name, children)."""

    status_code = 409

    def __init__(
        self,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)


class AuthenticationException(MediaLibraryException):
    """Raised when login fails (invalid credentials)."""

    status_code = 401

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "authentication_failed")


class ServiceUnavailableException(MediaLibraryException):
    """Raised by the fault-injection harness to simulate a transient outage."""

    status_code = 503

    def __init__(self, message: str, probability: float | None = None) -> None:
        """Initialize with message and the configured failure probability.

        Args:
            message: Description of the simulated failure.
            probability: Probability that produced this failure, for debugging.
        """
        details: dict[str, Any] = {"simulated_failure": True}
        if probability is not None:
            details["probability"] = probability
        super().__init__(message, "service_unavailable", details)


class HierarchyCycleException(MediaLibraryException):
    """Raised when parent pointers form a cycle (data-integrity error)."""

    status_code = 500

    def __init__(self, record_id: str, parent_field: str) -> None:
        """Initialize with the id at which the cycle was detected.

        Args:
            record_id: Record revisited while walking the hierarchy.
            parent_field: Name of the parent-pointer field that was followed.
        """
        super().__init__(
            f"Cycle detected in hierarchy at record {record_id}",
            "hierarchy_cycle",
            {"record_id": record_id, "parent_field": parent_field},
        )
