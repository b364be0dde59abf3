"""Error types shared by the store and the HTTP layer."""

from typing import Any


class MealbookError(Exception):
    """Base error carrying a client-facing message and an HTTP status."""

    http_status = 500

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class NotFoundError(MealbookError):
    """Requested entity is absent, or a delete affected zero rows."""

    http_status = 404


class ValidationFailure(MealbookError):
    """Input was rejected before reaching the database."""

    http_status = 422


class StoreFailure(MealbookError):
    """Any other failure raised by the data access layer.

    The underlying exception is chained as ``__cause__`` and logged; it is
    never sent to clients.
    """

    http_status = 500

    def __init__(self, message: str = "Internal store failure", details: Any = None):
        super().__init__(message, details)
