"""
Response header sanitizer for the ingestion endpoints.

The monitor only needs a status code. Every header the framework attaches
(cache directives, server fingerprints, ...) is removed and replaced by a
single opaque ``content-type: x``. The upstream ``content-length`` is the
one header kept: without it the server falls back to chunked framing and
adds ``transfer-encoding`` itself. This is plain ASGI middleware so it sees
every response under its path prefixes, including those produced by
exception handlers, and it turns any exception that escapes the app into a
bare 500.

CHANGELOG:
- 2026-10-18: Keep content-length so responses are not sent chunked
- 2026-10-16: Convert unhandled exceptions into a sanitized 500
- 2026-10-15: Initial creation (STORY-009)

TODO:
- None
"""

import logging
from collections.abc import Sequence

from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

OPAQUE_CONTENT_TYPE = "x"
INGEST_PATH_PREFIX = "/v2/solar"
FRAMING_HEADERS = frozenset({b"content-length"})


class MinimalHeadersMiddleware:
    """Strip all response headers except a fixed content-type and framing.

    Attributes:
        app: The wrapped ASGI application.
        path_prefixes: Request paths (and their sub-paths) to sanitize.
    """

    def __init__(
        self,
        app: ASGIApp,
        path_prefixes: Sequence[str] = (INGEST_PATH_PREFIX,),
    ) -> None:
        self.app = app
        self.path_prefixes = tuple(path_prefixes)
        self._headers = [(b"content-type", OPAQUE_CONTENT_TYPE.encode("latin-1"))]

    def applies_to(self, path: str) -> bool:
        return any(
            path == prefix or path.startswith(prefix + "/")
            for prefix in self.path_prefixes
        )

    def minimal_headers(self, headers: Sequence[tuple[bytes, bytes]]) -> list[tuple[bytes, bytes]]:
        """Return the opaque content-type plus the upstream framing headers."""
        kept = [(name, value) for name, value in headers if name.lower() in FRAMING_HEADERS]
        return self._headers + kept

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not self.applies_to(scope["path"]):
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_minimal(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
                message = {**message, "headers": self.minimal_headers(message.get("headers", []))}
            await send(message)

        try:
            await self.app(scope, receive, send_minimal)
        except Exception:
            logger.exception("Unhandled error on %s", scope["path"])
            if response_started:
                raise
            response = PlainTextResponse("internal error", status_code=500)
            await response(scope, receive, send_minimal)
