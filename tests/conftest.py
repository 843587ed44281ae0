# tests/conftest.py
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import asyncio
import pytest

# Додаємо src у sys.path, щоб працював імпорт "fxconv.…" без встановлення пакета
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from fxconv.domain.currency.interfaces import IKeyValueStore, IRatesProvider  # noqa: E402
from fxconv.errors import RateFetchError  # noqa: E402


USD_TABLE = {"USD": 1.0, "EUR": 0.9, "JPY": 150.0}


class MemoryStorage(IKeyValueStore):
    """Сховище в памʼяті, що запамʼятовує кожен запис."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(initial or {})
        self.writes: List[tuple] = []

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self.writes.append((key, value))


class FakeProvider(IRatesProvider):
    """
    Провайдер з керованими відповідями.

    `tables[base]` — курси для бази; `errors[base]` — виняток; `gates[base]` —
    asyncio.Event, на якому fetch чекає (для тестів перегонів).
    """

    def __init__(self, tables: Optional[Mapping[str, Mapping[str, float]]] = None) -> None:
        self.tables: Dict[str, Mapping[str, float]] = dict(tables or {"USD": USD_TABLE})
        self.errors: Dict[str, Exception] = {}
        self.gates: Dict[str, asyncio.Event] = {}
        self.calls: List[str] = []
        self.closed = False

    async def fetch(self, base_currency: str) -> Mapping[str, Any]:
        self.calls.append(base_currency)
        gate = self.gates.get(base_currency)
        if gate is not None:
            await gate.wait()
        if base_currency in self.errors:
            raise self.errors[base_currency]
        if base_currency not in self.tables:
            raise RateFetchError("unsupported-code", base_currency=base_currency)
        return {"result": "success", "base_code": base_currency, "conversion_rates": dict(self.tables[base_currency])}

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider(
        {
            "USD": USD_TABLE,
            "EUR": {"EUR": 1.0, "USD": 1.11, "JPY": 166.0},
        }
    )
