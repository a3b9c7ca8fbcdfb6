"""Exception hierarchy for the workbench core.

All custom exceptions inherit from AppException, which provides:
- A human-readable message
- A machine-readable error code
- An HTTP-style status code for the layer that renders the error
- An optional details dict (e.g. the offending field)

"Nothing found" is never an exception here: matchers return None or an
empty list. Database errors are not wrapped and reach the caller unchanged.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all workbench errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dict for JSON serialization."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ResourceNotFoundError(AppException):
    """Requested resource does not exist."""

    def __init__(self, resource: str, identifier: str | None = None):
        msg = f"{resource} not found"
        if identifier:
            msg = f"{resource} not found: {identifier}"
        super().__init__(
            msg,
            f"{resource.upper().replace(' ', '_')}_NOT_FOUND",
            404,
            {"resource": resource, "id": identifier}
            if identifier
            else {"resource": resource},
        )


class ValidationError(AppException):
    """A mutated entity failed validation before it was persisted."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message,
            "VALIDATION_ERROR",
            422,
            {"field": field} if field else {},
        )

    @property
    def field(self) -> str | None:
        return self.details.get("field")


class ExternalServiceError(AppException):
    """External service (OpenSearch) is unavailable or failed."""

    def __init__(self, service: str, message: str | None = None):
        msg = f"{service} is unavailable"
        if message:
            msg = f"{service}: {message}"
        super().__init__(
            msg,
            "EXTERNAL_SERVICE_ERROR",
            503,
            {"service": service},
        )
