"""Tests for settings loading."""

from aisleplan.config import Settings, get_settings


def test_settings_defaults(monkeypatch):
    for name in ("API_PREFIX", "LOG_LEVEL", "MAX_BATCH_ITEMS", "DEFAULT_STORE_NAME"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)
    assert settings.api_prefix == "/api"
    assert settings.log_level == "INFO"
    assert settings.max_batch_items == 500
    assert settings.default_store_name == ""
    assert settings.route_sample_items == 3
    assert settings.route_full_listing_limit == 5


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("MAX_BATCH_ITEMS", "10")
    monkeypatch.setenv("default_store_chain", "Kroger")

    settings = Settings(_env_file=None)
    assert settings.max_batch_items == 10
    assert settings.default_store_chain == "Kroger"


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
