"""Id Service — uuid4-backed implementation of the core IdService protocol.

Invariants:
    - fresh_id() never returns the same value twice within a process (uuid4 collision odds)

Design Decisions:
    - Hex form: no dashes, safe inside URLs and DOM ids used by the editor
"""

import uuid


class UuidIdService:
    """Default IdService for the API."""

    def fresh_id(self) -> str:
        return uuid.uuid4().hex
