"""Item Actions — the six item mutations on a flow document snapshot.

Invariants:
    - Every operation returns a MutationResult; the input snapshot is never mutated
    - A no-op returns the input snapshot itself (identity) with a NoOpReason
    - Indices are resolved once, against the snapshot passed in; out-of-range raises
      IndexOutOfRangeError before anything is committed
    - delete_item never takes a block below one item; detach_item_from_block does not check
    - Edges are only cascaded on delete_item / delete_item_path, never on detach
    - create_item never leaves an adopted edge sourced from a node outside the snapshot

Design Decisions:
    - Positional addressing kept over id lookups: item_index == len(items) means append
    - Each operation is one produce() call; the recipe returns an _Outcome that decides
      whether the draft becomes the next snapshot
    - Unsupported block variants are a no-op by default; strict mode raises instead
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from pydantic import BaseModel

from flowedit.core.boundary_protocols import IdService
from flowedit.core.domain_types import EdgeId, ItemId, ItemIndices, NoOpReason
from flowedit.core.edges import find_edge_by_id, remove_edges_from
from flowedit.core.errors import (
    ErrorContext, IndexOutOfRangeError, UnsupportedBlockVariantError,
)
from flowedit.core.flow_document import (
    BlockBase, CardsItem, EdgeSource, FlowDocument, block_has_items,
    item_has_paths, normalize_keys, unset_field,
)
from flowedit.core.item_factory import build_item, clone_item
from flowedit.core.snapshot import produce

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MutationResult:
    """Outcome of one item operation."""
    document: FlowDocument
    applied: bool
    item_id: ItemId | None = None
    reason: NoOpReason | None = None


@dataclass(frozen=True)
class _Outcome:
    applied: bool
    item_id: ItemId | None = None
    reason: NoOpReason | None = None


def _noop(reason: NoOpReason) -> _Outcome:
    return _Outcome(applied=False, reason=reason)


# ─── Index resolution ────────────────────────────────────────────

def _check_index(name: str, index: int | None, size: int, *, allow_end: bool = False) -> int:
    upper = size if allow_end else size - 1
    if index is None or index < 0 or index > upper:
        raise IndexOutOfRangeError(name, index, size)
    return index


def _resolve_block(draft: FlowDocument, indices: ItemIndices) -> BlockBase:
    group = draft.groups[_check_index("group_index", indices.group_index, len(draft.groups))]
    return group.blocks[_check_index("block_index", indices.block_index, len(group.blocks))]


def _resolve_item_index(block: BlockBase, indices: ItemIndices) -> int:
    return _check_index("item_index", indices.item_index, len(block.items))


def _adopt_edge(
    draft: FlowDocument, edge_id: EdgeId, owner: BaseModel, source: EdgeSource,
) -> None:
    """Re-source an existing edge to `source`; a missing edge is dropped from `owner`."""
    edge = find_edge_by_id(draft, edge_id)
    if edge is not None:
        edge.from_ = source
        return
    logger.debug(f"Dropping adoption of missing edge {edge_id}")
    if "outgoing_edge_id" in type(owner).model_fields:
        unset_field(owner, "outgoing_edge_id")


class ItemActions:
    """Create, duplicate, update, detach and delete items (and cards paths)."""

    def __init__(self, id_service: IdService, strict_block_variants: bool = False):
        self._id_service = id_service
        self._strict = strict_block_variants

    # ─── Public operations ──────────────────────────────────────

    def create_item(
        self, document: FlowDocument, item: Mapping[str, Any], indices: ItemIndices,
    ) -> MutationResult:
        """Insert a new item at indices.item_index and adopt the edges it names.

        The input outgoingEdgeId is re-sourced to the new item for every variant.
        Each cards path carrying outgoingEdgeId is re-sourced to its new path id,
        so a card moved by detach then create keeps its connections. Edge ids
        that do not exist are dropped from the new item (or path).
        """

        def recipe(draft: FlowDocument) -> _Outcome:
            block = _resolve_block(draft, indices)
            if not block_has_items(block):
                return self._unsupported(block, "create_item")
            item_index = _check_index(
                "item_index", indices.item_index, len(block.items), allow_end=True,
            )
            new_item = build_item(block, item, item_index, self._id_service)
            if new_item is None:
                return self._unsupported(block, "create_item")
            block.items.insert(item_index, new_item)

            # read from the input: cards items have no outgoing_edge_id field
            edge_id = item.get("outgoingEdgeId") or item.get("outgoing_edge_id")
            if edge_id:
                _adopt_edge(
                    draft, edge_id, new_item,
                    EdgeSource(block_id=block.id, item_id=new_item.id),
                )
            if item_has_paths(new_item):
                for path in new_item.paths:
                    if path.outgoing_edge_id:
                        _adopt_edge(
                            draft, path.outgoing_edge_id, path,
                            EdgeSource(block_id=block.id, item_id=new_item.id, path_id=path.id),
                        )
            return _Outcome(applied=True, item_id=new_item.id)

        return self._run(document, recipe)

    def duplicate_item(self, document: FlowDocument, indices: ItemIndices) -> MutationResult:
        """Insert a disconnected copy of the item right after it."""

        def recipe(draft: FlowDocument) -> _Outcome:
            block = _resolve_block(draft, indices)
            if not block_has_items(block):
                return self._unsupported(block, "duplicate_item")
            item_index = _resolve_item_index(block, indices)
            copy = clone_item(block, block.items[item_index], self._id_service)
            if copy is None:
                return self._unsupported(block, "duplicate_item")
            block.items.insert(item_index + 1, copy)
            return _Outcome(applied=True, item_id=copy.id)

        return self._run(document, recipe)

    def update_item(
        self, document: FlowDocument, indices: ItemIndices, updates: Mapping[str, Any],
    ) -> MutationResult:
        """Shallow-merge `updates` onto the item. The id never changes."""

        def recipe(draft: FlowDocument) -> _Outcome:
            block = _resolve_block(draft, indices)
            if not block_has_items(block):
                return _noop(NoOpReason.NOT_ITEM_BEARING)
            item_index = _resolve_item_index(block, indices)
            current = block.items[item_index]
            model = type(current)
            changes = normalize_keys(model, dict(updates))
            changes.pop("id", None)
            block.items[item_index] = model.model_validate(
                {**current.model_dump(exclude_unset=True), **changes},
            )
            return _Outcome(applied=True, item_id=current.id)

        return self._run(document, recipe)

    def detach_item_from_block(
        self, document: FlowDocument, indices: ItemIndices,
    ) -> MutationResult:
        """Remove the item without touching edges — the caller re-attaches it elsewhere."""

        def recipe(draft: FlowDocument) -> _Outcome:
            block = _resolve_block(draft, indices)
            if not block_has_items(block):
                return _noop(NoOpReason.NOT_ITEM_BEARING)
            detached = block.items.pop(_resolve_item_index(block, indices))
            return _Outcome(applied=True, item_id=detached.id)

        return self._run(document, recipe)

    def delete_item(self, document: FlowDocument, indices: ItemIndices) -> MutationResult:
        """Remove the item and every edge sourced from it (or from its paths)."""

        def recipe(draft: FlowDocument) -> _Outcome:
            block = _resolve_block(draft, indices)
            if not block_has_items(block):
                return _noop(NoOpReason.NOT_ITEM_BEARING)
            item_index = _resolve_item_index(block, indices)
            if len(block.items) == 1:
                return _noop(NoOpReason.ITEM_FLOOR)
            removed = block.items.pop(item_index)
            remove_edges_from(draft, removed.id)
            if isinstance(removed, CardsItem):
                for path in removed.paths:
                    remove_edges_from(draft, path.id)
            return _Outcome(applied=True, item_id=removed.id)

        return self._run(document, recipe)

    def delete_item_path(self, document: FlowDocument, indices: ItemIndices) -> MutationResult:
        """Remove one path of a cards item and the edges sourced from it."""

        def recipe(draft: FlowDocument) -> _Outcome:
            block = _resolve_block(draft, indices)
            if not block_has_items(block):
                return _noop(NoOpReason.NOT_ITEM_BEARING)
            item = block.items[_resolve_item_index(block, indices)]
            if not item_has_paths(item):
                return _noop(NoOpReason.PATHS_UNSUPPORTED)
            path_index = _check_index("path_index", indices.path_index, len(item.paths))
            remove_edges_from(draft, item.paths[path_index].id)
            item.paths.pop(path_index)
            return _Outcome(applied=True, item_id=item.id)

        return self._run(document, recipe)

    # ─── Internals ──────────────────────────────────────────────

    def _unsupported(self, block: BlockBase, operation: str) -> _Outcome:
        if self._strict:
            raise UnsupportedBlockVariantError(
                str(block.type), ErrorContext(operation=operation),
            )
        return _noop(NoOpReason.UNSUPPORTED_BLOCK_VARIANT)

    def _run(
        self, document: FlowDocument, recipe: Callable[[FlowDocument], _Outcome],
    ) -> MutationResult:
        draft, outcome = produce(document, recipe)
        if not outcome.applied:
            return MutationResult(document=document, applied=False, reason=outcome.reason)
        return MutationResult(document=draft, applied=True, item_id=outcome.item_id)
