"""Item Routes — HTTP surface for the six item operations.

Invariants:
    - Routes never contain mutation logic (delegate to DocumentEditor)
    - Every response carries applied/itemId/reason and the resulting snapshot
    - No-ops return 200 with applied=false; the caller must not assume removal

Design Decisions:
    - POST .../delete instead of DELETE with a body: some clients drop DELETE bodies
"""

from fastapi import APIRouter, Depends

from flowedit.api.routes.documents import get_editor
from flowedit.schemas.items import (
    CreateItemRequest, ItemIndicesBody, PathIndicesBody, UpdateItemRequest,
    mutation_response,
)
from flowedit.services.document_editor import DocumentEditor

router = APIRouter(prefix="/api/v1/documents/{document_id}/items", tags=["items"])


@router.post("")
async def create_item(
    document_id: str, body: CreateItemRequest,
    editor: DocumentEditor = Depends(get_editor),
):
    """Insert a new item; adopts item.outgoingEdgeId when that edge exists."""
    result = editor.create_item(document_id, body.item, body.indices.to_indices())
    return mutation_response(result)


@router.post("/duplicate")
async def duplicate_item(
    document_id: str, body: ItemIndicesBody,
    editor: DocumentEditor = Depends(get_editor),
):
    return mutation_response(editor.duplicate_item(document_id, body.to_indices()))


@router.patch("")
async def update_item(
    document_id: str, body: UpdateItemRequest,
    editor: DocumentEditor = Depends(get_editor),
):
    result = editor.update_item(document_id, body.indices.to_indices(), body.updates)
    return mutation_response(result)


@router.post("/detach")
async def detach_item_from_block(
    document_id: str, body: ItemIndicesBody,
    editor: DocumentEditor = Depends(get_editor),
):
    """Remove an item without touching edges (it is being moved)."""
    return mutation_response(editor.detach_item_from_block(document_id, body.to_indices()))


@router.post("/delete")
async def delete_item(
    document_id: str, body: ItemIndicesBody,
    editor: DocumentEditor = Depends(get_editor),
):
    """Delete an item and its edges. A block's last item is kept."""
    return mutation_response(editor.delete_item(document_id, body.to_indices()))


@router.post("/paths/delete")
async def delete_item_path(
    document_id: str, body: PathIndicesBody,
    editor: DocumentEditor = Depends(get_editor),
):
    return mutation_response(editor.delete_item_path(document_id, body.to_indices()))
