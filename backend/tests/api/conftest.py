"""API test fixtures — FastAPI test client with a fresh, deterministic editor.

Invariants:
    - Every test gets its own DocumentEditor (no state leaks between tests)
    - get_editor dependency overridden; ids are id1, id2, ... in call order
"""

import pytest
from httpx import ASGITransport, AsyncClient

from flowedit.api.routes.documents import get_editor
from flowedit.core.item_actions import ItemActions
from flowedit.main import app
from flowedit.services.document_editor import DocumentEditor
from tests.document_fixtures import cards_block, choice_block, dump_document_json, edge, text_block


@pytest.fixture
def editor(ids):
    return DocumentEditor(ItemActions(ids))


@pytest.fixture
async def client(editor):
    """FastAPI test client with the editor dependency overridden."""
    app.dependency_overrides[get_editor] = lambda: editor

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def document_json():
    """Choice block [A, B] with e1 from A, cards block with one card, text block."""
    return dump_document_json(
        choice_block("b1", "A", "B"),
        cards_block("b2", {"id": "c1", "title": None, "paths": [{"id": "p1", "text": "Go"}]}),
        text_block("b3"),
        edges=[edge("e1", "b1", "A"), edge("e2", "b2", "c1", path_id="p1")],
    )


@pytest.fixture
async def loaded(client, document_json):
    res = await client.post("/api/v1/documents", json=document_json)
    assert res.status_code == 201
    return document_json["id"]
