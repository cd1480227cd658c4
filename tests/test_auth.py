"""
Tests for X-Token shared-secret authentication.

Validates the authorize() gate for every deny reason, constant-time
comparison, and the TokenAuth FastAPI dependency.

CHANGELOG:
- 2026-10-18: Add non-ASCII and repeated header tests
- 2026-10-15: Add TokenAuth dependency tests (STORY-007)
- 2026-10-14: Initial creation (STORY-007)

TODO:
- None
"""

from unittest.mock import patch

from fastapi import Depends, FastAPI
from fastapi.responses import PlainTextResponse
from fastapi.testclient import TestClient

from solar_api.auth.token import ALLOW, DenyReason, TokenAuth, authorize
from solar_api.errors import AuthorizationError

SECRET = "s3cret"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_test_app(secret: str | None) -> FastAPI:
    """Create a minimal FastAPI app with one token-protected endpoint.

    Args:
        secret: Configured shared secret, or None.

    Returns:
        FastAPI: Application with a single protected GET /protected endpoint.
    """
    test_app = FastAPI()
    auth = TokenAuth(secret)

    @test_app.exception_handler(AuthorizationError)
    async def _denied(request, exc: AuthorizationError) -> PlainTextResponse:
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @test_app.get("/protected", dependencies=[Depends(auth.verify)])
    async def protected() -> dict:
        return {"ok": True}

    return test_app


# ---------------------------------------------------------------------------
# Tests for authorize()
# ---------------------------------------------------------------------------


class TestAuthorize:
    """Tests for the pure gate function."""

    def test_matching_token_is_allowed(self) -> None:
        decision = authorize({"X-Token": SECRET}, SECRET)

        assert decision is ALLOW
        assert decision.allowed

    def test_header_name_is_case_insensitive(self) -> None:
        assert authorize({"x-token": SECRET}, SECRET).allowed

    def test_unconfigured_secret(self) -> None:
        """No secret is an operational error, even with a token present."""
        decision = authorize({"X-Token": SECRET}, None)

        assert not decision.allowed
        assert decision.reason is DenyReason.SERVER_MISCONFIGURED
        assert decision.reason.status_code == 500
        assert decision.reason.message == "server misconfiguration"

    def test_empty_secret_is_unconfigured(self) -> None:
        assert authorize({"X-Token": ""}, "").reason is DenyReason.SERVER_MISCONFIGURED

    def test_missing_header(self) -> None:
        decision = authorize({}, SECRET)

        assert decision.reason is DenyReason.MISSING_TOKEN
        assert decision.reason.status_code == 401
        assert decision.reason.message == "missing token"

    def test_wrong_token(self) -> None:
        decision = authorize({"X-Token": "guess"}, SECRET)

        assert decision.reason is DenyReason.INVALID_TOKEN
        assert decision.reason.status_code == 401
        assert decision.reason.message == "invalid token"

    def test_empty_header_value_is_invalid(self) -> None:
        assert authorize({"X-Token": ""}, SECRET).reason is DenyReason.INVALID_TOKEN

    def test_token_comparison_is_exact(self) -> None:
        """Prefixes, case changes and padding do not match."""
        for candidate in ("s3cre", "S3CRET", " s3cret", "s3cret "):
            assert authorize({"X-Token": candidate}, SECRET).reason is DenyReason.INVALID_TOKEN

    def test_non_ascii_secret_matches_utf8_wire_bytes(self) -> None:
        """Header values are latin-1 decoded; the UTF-8 bytes still match."""
        wire_value = "päss".encode("utf-8").decode("latin-1")

        assert authorize({"X-Token": wire_value}, "päss").allowed

    def test_non_ascii_secret_rejects_other_encodings(self) -> None:
        latin1_value = "päss".encode("latin-1").decode("latin-1")

        assert authorize({"X-Token": latin1_value}, "päss").reason is DenyReason.INVALID_TOKEN

    def test_value_outside_latin1_is_invalid(self) -> None:
        assert authorize({"X-Token": "p€ss"}, "p€ss").reason is DenyReason.INVALID_TOKEN

    def test_uses_compare_digest(self) -> None:
        """Token comparison uses secrets.compare_digest."""
        with patch(
            "solar_api.auth.token.secrets.compare_digest", return_value=True
        ) as mock_cmp:
            decision = authorize({"X-Token": "anything"}, SECRET)

        mock_cmp.assert_called_once_with(b"anything", SECRET.encode("utf-8"))
        assert decision.allowed


# ---------------------------------------------------------------------------
# Tests for TokenAuth.verify (the FastAPI dependency)
# ---------------------------------------------------------------------------


class TestTokenAuthVerify:
    """Tests for the verify dependency used with FastAPI Depends()."""

    def test_valid_token_passes(self) -> None:
        client = TestClient(_make_test_app(SECRET))

        response = client.get("/protected", headers={"X-Token": SECRET})

        assert response.status_code == 200
        assert response.json() == {"ok": True}

    def test_missing_token_returns_401(self) -> None:
        client = TestClient(_make_test_app(SECRET))

        response = client.get("/protected")

        assert response.status_code == 401
        assert response.text == "missing token"

    def test_invalid_token_returns_401(self) -> None:
        client = TestClient(_make_test_app(SECRET))

        response = client.get("/protected", headers={"X-Token": "nope"})

        assert response.status_code == 401
        assert response.text == "invalid token"

    def test_unconfigured_secret_returns_500(self) -> None:
        client = TestClient(_make_test_app(None))

        response = client.get("/protected", headers={"X-Token": SECRET})

        assert response.status_code == 500
        assert response.text == "server misconfiguration"

    def test_non_ascii_secret_sent_as_utf8_passes(self) -> None:
        client = TestClient(_make_test_app("päss"))

        response = client.get("/protected", headers=[(b"x-token", "päss".encode("utf-8"))])

        assert response.status_code == 200

    def test_repeated_header_checks_first_value(self) -> None:
        client = TestClient(_make_test_app(SECRET))

        rejected = client.get("/protected", headers=[("X-Token", "nope"), ("X-Token", SECRET)])
        accepted = client.get("/protected", headers=[("X-Token", SECRET), ("X-Token", "nope")])

        assert rejected.status_code == 401
        assert rejected.text == "invalid token"
        assert accepted.status_code == 200
