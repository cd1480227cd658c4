"""
Authentication package.

Exports the TokenAuth dependency class and the authorize() gate for use by
FastAPI route handlers.

CHANGELOG:
- 2026-10-15: Export TokenAuth (STORY-007)
- 2026-10-14: Initial creation (STORY-007)

TODO:
- None
"""

from solar_api.auth.token import AuthDecision, DenyReason, TokenAuth, authorize

__all__ = ["AuthDecision", "DenyReason", "TokenAuth", "authorize"]
