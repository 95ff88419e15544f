"""Sprint namer exception hierarchy.

Provides structured exceptions for error handling throughout the codebase.
All exceptions inherit from SprintNamerError for easy catching.
"""

from __future__ import annotations


class SprintNamerError(Exception):
    """Base exception for all sprint namer errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code for API responses.
    """

    code: str = "sprint_namer_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, object]:
        """Convert exception to API-friendly dictionary."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
            }
        }


class InvalidInputError(SprintNamerError):
    """Invalid input provided.

    Raised when a seed, page id or request body fails validation.

    Attributes:
        field: The field that failed validation.
        message: Description of the validation failure.
    """

    code: str = "invalid_input"

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)

    def to_dict(self) -> dict[str, object]:
        """Convert exception to API-friendly dictionary."""
        return {
            "error": {
                "code": self.code,
                "field": self.field,
                "message": self.message,
            }
        }


class AuthenticationError(SprintNamerError):
    """Authentication failed.

    Raised when an automations token or webhook signature is invalid or missing.
    """

    code: str = "authentication_error"


class CapacityExceededError(SprintNamerError):
    """Job dispatcher is saturated.

    Callers should treat this as "try again later", never as fatal.

    Attributes:
        pending: Jobs in flight when the submission was rejected.
        max_pending: Dispatcher capacity.
        retry_after: Suggested seconds before retrying.
    """

    code: str = "capacity_exceeded"

    def __init__(self, pending: int, max_pending: int, retry_after: int = 5) -> None:
        self.pending = pending
        self.max_pending = max_pending
        self.retry_after = retry_after
        super().__init__("Server is busy, try again later")

    def to_dict(self) -> dict[str, object]:
        """Convert exception to API-friendly dictionary."""
        return {
            "error": {
                "code": self.code,
                "retry_after": self.retry_after,
                "message": self.message,
            }
        }


class UpstreamError(SprintNamerError):
    """Notion API request failed.

    Not retried internally; Notion redelivers webhooks on its own schedule.

    Attributes:
        status: HTTP status code, or None when no response was received.
        body: Response body text (possibly truncated), if any.
    """

    code: str = "upstream_error"

    def __init__(self, message: str, status: int | None = None, body: str | None = None) -> None:
        self.status = status
        self.body = body
        super().__init__(message)

    def to_dict(self) -> dict[str, object]:
        """Convert exception to API-friendly dictionary (without the upstream body)."""
        return {
            "error": {
                "code": self.code,
                "status": self.status,
                "message": self.message,
            }
        }


class ConfigurationError(SprintNamerError):
    """Configuration error.

    Raised when required configuration is missing or invalid. Fatal at startup.
    """

    code: str = "configuration_error"
