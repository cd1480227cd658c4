"""
Shared-secret token authentication for the ingestion endpoints.

The monitor sends the configured secret verbatim in an ``X-Token`` header.
The gate distinguishes a server that has no secret configured (operational
error, 500) from a client that sent no token or the wrong one (401). Uses
constant-time comparison via secrets.compare_digest to prevent timing
attacks. The header bytes as sent on the wire are compared with the UTF-8
encoding of the secret, so non-ASCII secrets work byte-for-byte. When the
header is repeated, the first value is the one checked.

CHANGELOG:
- 2026-10-18: Compare raw header bytes with the UTF-8 secret
- 2026-10-15: Wrap authorize() in a FastAPI dependency (STORY-007)
- 2026-10-14: Initial creation (STORY-007)

TODO:
- None
"""

import logging
import secrets
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from fastapi import Request

from solar_api.errors import AuthorizationError

logger = logging.getLogger(__name__)

TOKEN_HEADER = "X-Token"


class DenyReason(Enum):
    """Why a request was refused, with its HTTP status and response body."""

    SERVER_MISCONFIGURED = (500, "server misconfiguration")
    MISSING_TOKEN = (401, "missing token")
    INVALID_TOKEN = (401, "invalid token")

    @property
    def status_code(self) -> int:
        return self.value[0]

    @property
    def message(self) -> str:
        return self.value[1]


@dataclass(frozen=True)
class AuthDecision:
    """Outcome of authorize(): allowed, or denied with a reason."""

    reason: DenyReason | None = None

    @property
    def allowed(self) -> bool:
        return self.reason is None


ALLOW = AuthDecision()


def _header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is not None:
        return value
    # Plain dicts are case-sensitive; Starlette's Headers already are not.
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


def authorize(headers: Mapping[str, str], secret: str | None) -> AuthDecision:
    """Check the X-Token header against the configured secret.

    Args:
        headers: Request headers, values decoded as latin-1 the way ASGI
            servers and Starlette deliver them.
        secret: The configured shared secret, or None when unconfigured.

    Returns:
        AuthDecision: ALLOW, or a denial carrying the DenyReason.
    """
    if not secret:
        return AuthDecision(DenyReason.SERVER_MISCONFIGURED)

    token = _header(headers, TOKEN_HEADER)
    if token is None:
        return AuthDecision(DenyReason.MISSING_TOKEN)

    # Header values arrive latin-1 decoded; re-encoding recovers the wire bytes.
    try:
        presented = token.encode("latin-1")
    except UnicodeEncodeError:
        return AuthDecision(DenyReason.INVALID_TOKEN)

    if not secrets.compare_digest(presented, secret.encode("utf-8")):
        return AuthDecision(DenyReason.INVALID_TOKEN)

    return ALLOW


class TokenAuth:
    """FastAPI-compatible X-Token authentication dependency.

    Holds the secret read once at start-up. Designed to be used with
    FastAPI's Depends() mechanism; it runs before the endpoint reads the
    request body, so unauthenticated bodies are never parsed.

    Attributes:
        secret: The configured shared secret, or None.
    """

    def __init__(self, secret: str | None) -> None:
        self.secret = secret
        if not secret:
            logger.error(
                "SOLAR_BACKEND_TOKEN is not configured; "
                "all ingestion requests will be refused"
            )

    async def verify(self, request: Request) -> None:
        """Validate the request's X-Token header.

        Args:
            request: The incoming FastAPI request.

        Raises:
            AuthorizationError: 500 if no secret is configured, 401 if the
                token is missing or does not match.
        """
        decision = authorize(request.headers, self.secret)
        if decision.allowed:
            return

        reason = decision.reason
        client = request.client.host if request.client else "unknown"
        if reason is DenyReason.SERVER_MISCONFIGURED:
            logger.error("Refusing %s: no shared secret configured", request.url.path)
        else:
            logger.warning(
                "Refusing %s from %s: %s", request.url.path, client, reason.message
            )
        raise AuthorizationError(reason.status_code, reason.message)
