"""Settings — defaults and environment overrides."""

import pytest
from pydantic import ValidationError

from flowedit.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.strict_block_variants is False
    assert settings.log_level == "INFO"
    assert settings.log_format == "json"


def test_environment_override(monkeypatch):
    monkeypatch.setenv("FLOWEDIT_STRICT_BLOCK_VARIANTS", "true")
    monkeypatch.setenv("FLOWEDIT_LOG_FORMAT", "text")
    settings = Settings(_env_file=None)
    assert settings.strict_block_variants is True
    assert settings.log_format == "text"


def test_invalid_log_format_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_format="xml")
