"""errors.py

Exception hierarchy raised by the exchange access layer.

Every failure a caller can see derives from :class:`KunaError`, so a display
layer can catch one type and print ``str(exc)``. Decode problems carry the
JSON *path* of the offending field so malformed responses are easy to trace.
"""

from __future__ import annotations


class KunaError(Exception):
    """Base class for every error raised by this package."""


class TransportError(KunaError):
    """Network-level failure: timeout, DNS, connection refused, …"""


class HTTPStatusError(KunaError):
    """Server answered with a non-2xx status and no readable error body."""

    def __init__(self, status_line: str, text: str | None = None):
        self.status_line = status_line
        super().__init__(text or f"server returned HTTP response code {status_line}")


class ServerError(HTTPStatusError):
    """Non-2xx status with a structured ``{"error": {...}}`` payload."""

    def __init__(self, status_line: str, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(status_line, f"{status_line}; {code}: {message}")


class DecodeError(KunaError):
    """Response body does not have the expected shape."""

    def __init__(self, path: str, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"{path}: {detail}")


class MissingValue(DecodeError):
    """A required value is ``null`` or absent."""


class TypeMismatch(DecodeError):
    """A value is present but of the wrong kind."""


class TimeFormatError(DecodeError):
    """A timestamp string matches none of the accepted layouts."""


class MissingCredentials(KunaError):
    """A private endpoint was called without an access/secret key pair."""
