"""Custom exception hierarchy for pybifrost."""

from __future__ import annotations


class BifrostError(Exception):
    """Base exception for all pybifrost errors."""


class BifrostConfigError(BifrostError):
    """Invalid or missing configuration."""


class BifrostTransportError(BifrostError):
    """HTTP-level failure (network, non-2xx, invalid JSON).

    The message is the human-readable text extracted from the response
    body (``error`` field, raw text, or ``HTTP <status>``) so it can be
    shown to the user as-is.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class BifrostApiError(BifrostError):
    """Response body could not be interpreted as the expected payload."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class BifrostValidationError(BifrostError):
    """A request was rejected client-side before reaching the bridge.

    Raised for example when trying to delete the reserved default room.
    """
