"""Document Routes — load, read, drop and the health probe."""

from tests.document_fixtures import choice_block, dump_document_json


async def test_load_and_get_document(client, document_json):
    res = await client.post("/api/v1/documents", json=document_json)
    assert res.status_code == 201
    assert res.json() == document_json

    res = await client.get(f"/api/v1/documents/{document_json['id']}")
    assert res.status_code == 200
    assert res.json() == document_json


async def test_load_rejects_broken_document(client):
    res = await client.post(
        "/api/v1/documents", json=dump_document_json(choice_block("b1", "A", "A")),
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "DOCUMENT_INTEGRITY"
    assert error["category"] == "integrity"


async def test_load_rejects_malformed_payload(client):
    res = await client.post("/api/v1/documents", json={"groups": []})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_drop_document(client, loaded):
    res = await client.delete(f"/api/v1/documents/{loaded}")
    assert res.status_code == 204
    res = await client.get(f"/api/v1/documents/{loaded}")
    assert res.status_code == 404


async def test_drop_unknown_document_is_404(client):
    res = await client.delete("/api/v1/documents/missing")
    assert res.status_code == 404


async def test_health_check(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"
    assert res.json()["service"] == "flowedit-api"
