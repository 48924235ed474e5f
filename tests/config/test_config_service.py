"""
🧪 test_config_service.py — unit-тести для ConfigService

Перевіряє:
- Singleton та завантаження config.yaml
- Перекриття значень змінними середовища
- Допоміжні методи злиття словників
"""

import pytest

from rate_converter.config.config_service import ENV_OVERRIDES, ConfigService


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for env_name in ENV_OVERRIDES:
        monkeypatch.delenv(env_name, raising=False)
    ConfigService._instance = None
    yield
    ConfigService._instance = None


def test_singleton():
    assert ConfigService() is ConfigService()


def test_yaml_defaults_are_loaded():
    config = ConfigService()
    assert config.get("storage.path") == "data/converter_settings.json"
    assert config.get("live_rate.max_age_hours") == 6
    assert config.get("live_rate.coalesce_refresh") is True
    endpoints = config.get("currency_api.endpoints")
    assert [e["url"] for e in endpoints] == [
        "https://open.er-api.com/v6/latest/USD",
        "https://api.exchangerate-api.com/v4/latest/USD",
    ]


def test_missing_key_returns_default():
    config = ConfigService()
    assert config.get("nope.nothing", "fallback") == "fallback"
    assert config.get("storage.path.deeper") is None


def test_env_overrides_yaml(monkeypatch):
    monkeypatch.setenv("RATE_CONVERTER_STORE_PATH", "/tmp/custom.json")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    config = ConfigService.reload()

    assert config.get("storage.path") == "/tmp/custom.json"
    assert config.get("logging.level") == "DEBUG"
    assert config.get("logging.console_level") == "WARNING"


def test_empty_env_value_is_ignored(monkeypatch):
    monkeypatch.setenv("RATE_CONVERTER_USER_AGENT", "")
    config = ConfigService.reload()
    assert config.get("currency_api.user_agent") == "RateConverter/1.0"


def test_reload_creates_fresh_instance(monkeypatch):
    first = ConfigService()
    monkeypatch.setenv("RATE_CONVERTER_MAX_AGE_HOURS", "2")
    second = ConfigService.reload()

    assert second is not first
    assert second.get("live_rate.max_age_hours") == "2"
    assert first.get("live_rate.max_age_hours") == 6


def test_as_dict_contains_sections():
    data = ConfigService().as_dict()
    assert {"storage", "currency_api", "live_rate", "logging"} <= set(data)


def test_unflatten_and_deep_update():
    flat = {"a.b.c": 1, "a.d": 2, "e": 3}
    nested = ConfigService._unflatten_dict(flat)
    assert nested == {"a": {"b": {"c": 1}, "d": 2}, "e": 3}

    target = {"a": {"b": {"c": 0, "x": 9}}, "keep": True}
    ConfigService()._deep_update(target, nested)
    assert target == {"a": {"b": {"c": 1, "x": 9}, "d": 2}, "e": 3, "keep": True}
