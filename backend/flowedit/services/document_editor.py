"""Document Editor — holds the current snapshot per document and applies item actions.

Invariants:
    - The stored snapshot is replaced only when an operation applied
    - A document is integrity-checked when loaded; a broken document is never stored
    - Errors from the core propagate unchanged, enriched with document_id/operation context

Design Decisions:
    - In-memory dict, not DB: persistence and sync are owned by another layer
      (ADR: single-process uvicorn, state lost on restart is acceptable)
    - One method per core operation: every mapping visible, no getattr dispatch
"""

import logging
from typing import Any, Callable, Mapping

from flowedit.core.domain_types import DocumentId, ItemIndices
from flowedit.core.enforce_integrity import find_integrity_violations
from flowedit.core.errors import (
    DocumentIntegrityError, ErrorContext, FlowEditError, ResourceNotFoundError,
)
from flowedit.core.flow_document import FlowDocument
from flowedit.core.item_actions import ItemActions, MutationResult

logger = logging.getLogger(__name__)


class DocumentEditor:
    """Serialises item operations against the current snapshot of each document."""

    def __init__(self, actions: ItemActions):
        self._actions = actions
        self._documents: dict[DocumentId, FlowDocument] = {}

    # ─── Document lifecycle ─────────────────────────────────────

    def load(self, document: FlowDocument) -> FlowDocument:
        """Store `document` as the current snapshot (replacing any previous one)."""
        violations = find_integrity_violations(document)
        if violations:
            raise DocumentIntegrityError(
                violations, ErrorContext(document_id=document.id, operation="load"),
            )
        self._documents[document.id] = document
        logger.info(
            f"Loaded document with {len(document.groups)} group(s)",
            extra={"document_id": document.id, "operation": "load"},
        )
        return document

    def get(self, document_id: DocumentId) -> FlowDocument:
        document = self._documents.get(document_id)
        if document is None:
            raise ResourceNotFoundError("Document", document_id)
        return document

    def drop(self, document_id: DocumentId) -> None:
        self.get(document_id)
        del self._documents[document_id]
        logger.info("Dropped document", extra={"document_id": document_id, "operation": "drop"})

    # ─── Item operations ────────────────────────────────────────

    def create_item(
        self, document_id: DocumentId, item: Mapping[str, Any], indices: ItemIndices,
    ) -> MutationResult:
        return self._apply(
            document_id, "create_item",
            lambda doc: self._actions.create_item(doc, item, indices),
        )

    def duplicate_item(self, document_id: DocumentId, indices: ItemIndices) -> MutationResult:
        return self._apply(
            document_id, "duplicate_item",
            lambda doc: self._actions.duplicate_item(doc, indices),
        )

    def update_item(
        self, document_id: DocumentId, indices: ItemIndices, updates: Mapping[str, Any],
    ) -> MutationResult:
        return self._apply(
            document_id, "update_item",
            lambda doc: self._actions.update_item(doc, indices, updates),
        )

    def detach_item_from_block(self, document_id: DocumentId, indices: ItemIndices) -> MutationResult:
        return self._apply(
            document_id, "detach_item_from_block",
            lambda doc: self._actions.detach_item_from_block(doc, indices),
        )

    def delete_item(self, document_id: DocumentId, indices: ItemIndices) -> MutationResult:
        return self._apply(
            document_id, "delete_item",
            lambda doc: self._actions.delete_item(doc, indices),
        )

    def delete_item_path(self, document_id: DocumentId, indices: ItemIndices) -> MutationResult:
        return self._apply(
            document_id, "delete_item_path",
            lambda doc: self._actions.delete_item_path(doc, indices),
        )

    # ─── Internals ──────────────────────────────────────────────

    def _apply(
        self,
        document_id: DocumentId,
        operation: str,
        mutate: Callable[[FlowDocument], MutationResult],
    ) -> MutationResult:
        current = self.get(document_id)
        try:
            result = mutate(current)
        except FlowEditError as exc:
            exc.context.document_id = document_id
            exc.context.operation = operation
            logger.warning(
                f"{operation} rejected: {exc.message}",
                extra={
                    "document_id": document_id, "operation": operation,
                    "error_code": exc.code,
                },
            )
            raise

        if result.applied:
            self._documents[document_id] = result.document
            logger.info(
                f"{operation} applied",
                extra={
                    "document_id": document_id, "operation": operation,
                    "item_id": result.item_id,
                },
            )
        else:
            logger.info(
                f"{operation} was a no-op",
                extra={
                    "document_id": document_id, "operation": operation,
                    "reason": result.reason.value if result.reason else None,
                },
            )
        return result
