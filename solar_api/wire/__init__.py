"""
Binary wire format package.

Exports the upload and event decoders.

CHANGELOG:
- 2026-10-15: Export decode_event (STORY-004)
- 2026-10-14: Initial creation (STORY-003)
"""

from solar_api.wire.decoder import decode_event, decode_upload

__all__ = ["decode_event", "decode_upload"]
