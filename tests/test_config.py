import pytest
from pydantic import ValidationError

from emlkit.config import Settings, get_settings, reset_settings


def test_defaults(monkeypatch):
    for key in ("EMLKIT_MAX_MESSAGE_BYTES", "EMLKIT_MAX_FILES", "EMLKIT_LOG_LEVEL", "EMLKIT_INPUT_EXTENSIONS"):
        monkeypatch.delenv(key, raising=False)
    settings = Settings(_env_file=None)
    assert settings.MAX_MESSAGE_BYTES == 10 * 1024 * 1024
    assert settings.MAX_FILES == 50
    assert settings.LOG_LEVEL == "INFO"
    assert settings.input_extensions() == [".eml", ".txt"]


def test_env_overrides_and_cache(monkeypatch):
    monkeypatch.setenv("EMLKIT_MAX_FILES", "3")
    monkeypatch.setenv("EMLKIT_LOG_LEVEL", "debug")
    monkeypatch.setenv("EMLKIT_INPUT_EXTENSIONS", "EML, msg ,")
    settings = get_settings()
    assert settings.MAX_FILES == 3
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.input_extensions() == [".eml", ".msg"]
    assert get_settings() is settings

    monkeypatch.setenv("EMLKIT_MAX_FILES", "4")
    reset_settings()
    assert get_settings().MAX_FILES == 4


def test_invalid_values_rejected(monkeypatch):
    monkeypatch.setenv("EMLKIT_LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
    monkeypatch.setenv("EMLKIT_LOG_LEVEL", "INFO")
    monkeypatch.setenv("EMLKIT_MAX_MESSAGE_BYTES", "0")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
