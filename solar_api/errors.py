"""
Error taxonomy for the ingestion endpoints.

Every failure that reaches a client is an IngestError carrying an HTTP status
code and a short plain-text message. A single exception handler in
solar_api.api.main renders these; no structured error body is ever returned
to the device.

CHANGELOG:
- 2026-10-16: Add PayloadTooLarge for request body limits (STORY-006)
- 2026-10-14: Initial creation (STORY-002)

TODO:
- None
"""

from __future__ import annotations


class IngestError(Exception):
    """Base class for errors that terminate an ingestion request.

    Attributes:
        status_code: HTTP status code sent to the client.
        message: Plain-text response body.
    """

    status_code: int = 500
    message: str = "internal error"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.message)
        self.detail = detail or self.message


class MalformedPayload(IngestError):
    """Request body does not parse as the expected binary message."""

    status_code = 400
    message = "malformed payload"


class PayloadTooLarge(IngestError):
    """Request body exceeds MAX_REQUEST_BYTES."""

    status_code = 413
    message = "payload too large"


class InvalidContentLength(IngestError):
    """Content-Length header is not an integer."""

    status_code = 400
    message = "invalid content length"


class PersistenceFailure(IngestError):
    """The repository could not durably store a record. Never retried."""

    status_code = 500
    message = "persistence failure"


class AuthorizationError(IngestError):
    """Raised by the token gate; status and body follow the deny reason."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
