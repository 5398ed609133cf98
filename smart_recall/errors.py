"""Application errors with category labels and HTTP status codes."""


class SmartRecallError(Exception):
    """Base class for application errors."""

    category = "error"
    status_code = 500

    def __init__(self, message: str, stage: str | None = None):
        super().__init__(message)
        self.stage = stage

    def to_dict(self) -> dict[str, str]:
        """Serialize the error without leaking internal detail."""
        return {"error": str(self), "category": self.category}


class InvalidInputError(SmartRecallError):
    """Raised for empty queries and missing required fields."""

    category = "invalid_input"
    status_code = 400


class UnauthenticatedError(SmartRecallError):
    """Raised when no caller identity is supplied."""

    category = "unauthenticated"
    status_code = 401


class NotFoundError(SmartRecallError):
    """Raised when a record does not exist for the requesting owner."""

    category = "not_found"
    status_code = 404


class StorageError(SmartRecallError):
    """Raised when the persistent store cannot be read or written."""

    category = "storage_error"
    status_code = 500


class ModelUnavailableError(SmartRecallError):
    """Raised when the language model is unreachable, misconfigured or erroring."""

    category = "model_unavailable"
    status_code = 502
