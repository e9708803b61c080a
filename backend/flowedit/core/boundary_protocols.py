"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Id generation is reached only through IdService

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass any object with fresh_id()
"""

from typing import Protocol


class IdService(Protocol):
    """Supplies identifiers unique for the lifetime of a document."""
    def fresh_id(self) -> str: ...
