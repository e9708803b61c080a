"""Domain Types — identities, block variants, positional addresses and no-op reasons.

Invariants:
    - ITEM_BEARING_BLOCK_TYPES is the single source of truth for the HasItems capability
    - ItemIndices is resolved against exactly one snapshot and never stored
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over wrappers for ids: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (the editor speaks JSON)
    - Frozen dataclass for ItemIndices: an address is a value, never mutated in place
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

DocumentId = NewType("DocumentId", str)
BlockId = NewType("BlockId", str)
ItemId = NewType("ItemId", str)
PathId = NewType("PathId", str)
EdgeId = NewType("EdgeId", str)


# ─── Enums ───────────────────────────────────────────────────────

class BlockType(str, Enum):
    """Block variants known to the editor — values match the document JSON `type` tag."""
    CONDITION = "Condition"
    CHOICE = "choice input"
    PICTURE_CHOICE = "picture choice input"
    CARDS = "cards"
    TEXT = "text"
    SET_VARIABLE = "Set variable"


ITEM_BEARING_BLOCK_TYPES = frozenset({
    BlockType.CONDITION,
    BlockType.CHOICE,
    BlockType.PICTURE_CHOICE,
    BlockType.CARDS,
})


class NoOpReason(str, Enum):
    """Why an item operation left the document unchanged."""
    ITEM_FLOOR = "item_floor"
    UNSUPPORTED_BLOCK_VARIANT = "unsupported_block_variant"
    NOT_ITEM_BEARING = "not_item_bearing"
    PATHS_UNSUPPORTED = "paths_unsupported"


# ─── Positional Addressing ───────────────────────────────────────

@dataclass(frozen=True)
class ItemIndices:
    """Position of an item (and optionally one of its paths) inside a snapshot."""
    group_index: int
    block_index: int
    item_index: int
    path_index: int | None = None
