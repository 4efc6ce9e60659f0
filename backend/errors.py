# errors.py
# Error taxonomy. Every subclass is surfaced to the caller as a flat
# { "error": <message> } body with HTTP 500 (see main.py handlers).

from __future__ import annotations


class ClipToTripError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class RequestError(ClipToTripError):
    """Caller sent an unusable request (e.g. no video URL)."""


class ConfigurationError(ClipToTripError):
    """Credentials or environment values are absent."""


class AuthenticationError(ClipToTripError):
    """Missing or rejected bearer token."""


class UpstreamError(ClipToTripError):
    """Non-2xx or malformed response from an external API."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class ContentUnresolvableError(ClipToTripError):
    """No travel location could be determined from the video content."""


class PersistenceError(ClipToTripError):
    """The itineraries table rejected an insert/select/delete."""
