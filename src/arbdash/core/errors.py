"""
Refresh error taxonomy.

Every way a snapshot refresh can fail maps onto one of these types.
The polling controller captures them into state instead of letting
them escape the polling loop.
"""


class RefreshError(Exception):
    """Base exception for a failed snapshot refresh."""

    kind: str = "unknown"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NetworkFailure(RefreshError):
    """Transport-level failure: unreachable host, reset connection, timeout."""

    kind = "network"


class ResponseFailure(RefreshError):
    """The service answered with a non-success status code."""

    kind = "response"

    def __init__(self, message: str, status: int) -> None:
        super().__init__(message)
        self.status = status


class ShapeValidationFailure(RefreshError):
    """A payload arrived but does not match the snapshot shape."""

    kind = "shape"


class InvalidPriceError(ValueError):
    """Raised when a price cannot be formatted (negative or non-finite)."""

    pass
