from __future__ import annotations


class TaoStakeError(Exception):
    """Base error for the provider read-API. `status_code` is the HTTP status it maps to."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgument(TaoStakeError):
    """Malformed address, flag, or pagination value. Raised before any source call."""

    status_code = 400


class NotFound(TaoStakeError):
    status_code = 404


class UpstreamFailure(TaoStakeError):
    """The provider source failed (transport error or unexpected upstream status)."""

    status_code = 500
