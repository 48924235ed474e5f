# tests/conftest.py
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pytest

# Додаємо src у sys.path, щоб працював імпорт "rate_converter.…"
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from rate_converter.infrastructure.storage.json_store import JsonFileStore  # noqa: E402
from rate_converter.infrastructure.storage.settings_store import SettingsStore  # noqa: E402
from rate_converter.shared.errors import FetchError  # noqa: E402


class FakeFetcher:
    """Фейковий `IRateFetcher`: віддає заготовлені курси або підіймає винятки по черзі."""

    def __init__(self, results: Optional[List[Union[float, Exception]]] = None) -> None:
        self.results = list(results or [])
        self.calls = 0

    async def fetch(self) -> float:
        self.calls += 1
        if not self.results:
            raise FetchError("no more fake results")
        item = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(item, Exception):
            raise item
        return item


class DictConfig:
    """Мінімальний конфіг із `.get('a.b')` поверх словника."""

    def __init__(self, data: Dict[str, Any]) -> None:
        self.data = data

    def get(self, key: str, default: Any = None) -> Any:
        value: Any = self.data
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default
        return value


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "converter_settings.json"


@pytest.fixture
def json_store(store_path):
    return JsonFileStore(store_path)


@pytest.fixture
def settings_store(json_store):
    return SettingsStore(json_store)


@pytest.fixture
def fake_fetcher_factory():
    return FakeFetcher


@pytest.fixture
def dict_config_factory():
    return DictConfig
