"""Root conftest — shared test configuration."""

import pytest

from tests.document_fixtures import SequentialIds


@pytest.fixture
def ids():
    """Fresh deterministic id source per test."""
    return SequentialIds()
