"""
Error taxonomy for the relay.

Every error carries the HTTP status it maps to and renders as a
``{"error": ..., "details": ...}`` body at the request boundary.
"""

from typing import Any, Dict, Optional


class RelayError(Exception):
    """Base class for errors that are turned into JSON responses."""

    status_code: int = 500

    def __init__(self, error: str, details: Optional[str] = None):
        super().__init__(details or error)
        self.error = error
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(RelayError):
    """Missing or malformed request input."""

    status_code = 400


class NotFoundError(RelayError):
    """A collaborator reported that the requested identity does not exist."""

    status_code = 404


class UpstreamError(RelayError):
    """Any failure from the pinning service or the record store."""

    status_code = 500


class UploadError(UpstreamError):
    pass


class ContentStoreError(UpstreamError):
    pass


class TranscodeError(UpstreamError):
    pass


class FormatError(TranscodeError):
    """Image payload is not an embedded base64 data URL."""
