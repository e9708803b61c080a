"""Error Hierarchy — codes, statuses and the REST envelope."""

from flowedit.core.errors import (
    DocumentIntegrityError, ErrorCategory, ErrorContext, FlowEditError,
    IndexOutOfRangeError, ResourceNotFoundError, UnsupportedBlockVariantError,
)


def test_index_out_of_range_is_409_validation_error():
    err = IndexOutOfRangeError("item_index", 4, 2)
    assert isinstance(err, FlowEditError)
    assert err.code == "INDEX_OUT_OF_RANGE"
    assert err.category == ErrorCategory.VALIDATION
    assert err.http_status == 409
    assert "item_index=4" in err.message


def test_missing_index_message():
    err = IndexOutOfRangeError("path_index", None, 3)
    assert err.message == "path_index is required"


def test_unsupported_block_variant_is_400():
    err = UnsupportedBlockVariantError("text")
    assert err.code == "UNSUPPORTED_BLOCK_VARIANT"
    assert err.http_status == 400


def test_integrity_error_lists_violations():
    err = DocumentIntegrityError(["a", "b"])
    assert err.violations == ["a", "b"]
    assert err.message.endswith("a; b")


def test_to_response_envelope_carries_context():
    err = ResourceNotFoundError(
        "Document", "doc9", ErrorContext(document_id="doc9", operation="get"),
    )
    body = err.to_response()["error"]
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["category"] == "resource_not_found"
    assert body["severity"] == "error"
    assert body["context"] == {"document_id": "doc9", "operation": "get"}
    assert "timestamp" in body
