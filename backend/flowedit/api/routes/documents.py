"""Document Routes — load, read and drop documents held by the editor.

Invariants:
    - One DocumentEditor per process, shared by every route (get_editor)
    - Loaded documents pass the integrity check or are rejected with 400

Design Decisions:
    - get_editor is a cached dependency: tests swap it via app.dependency_overrides
    - get_editor exported for reuse by the item routes (DRY over duplication)
"""

import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, Response, status

from flowedit.config import get_settings
from flowedit.core.flow_document import FlowDocument, dump_document
from flowedit.core.item_actions import ItemActions
from flowedit.infrastructure.id_service import UuidIdService
from flowedit.services.document_editor import DocumentEditor

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/documents", tags=["documents"])


@lru_cache
def get_editor() -> DocumentEditor:
    """Process-wide editor built from settings."""
    settings = get_settings()
    return DocumentEditor(ItemActions(
        UuidIdService(), strict_block_variants=settings.strict_block_variants,
    ))


@router.post("", status_code=status.HTTP_201_CREATED)
async def load_document(
    body: FlowDocument, editor: DocumentEditor = Depends(get_editor),
):
    """Load a document into the editor, replacing any snapshot with the same id."""
    return dump_document(editor.load(body))


@router.get("/{document_id}")
async def get_document(
    document_id: str, editor: DocumentEditor = Depends(get_editor),
):
    """Current snapshot of a document."""
    return dump_document(editor.get(document_id))


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def drop_document(
    document_id: str, editor: DocumentEditor = Depends(get_editor),
):
    """Forget a document. Unknown ids return 404."""
    editor.drop(document_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
