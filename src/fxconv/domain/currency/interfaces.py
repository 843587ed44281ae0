# 💱 fxconv/domain/currency/interfaces.py
"""
💱 Контракти та DTO валютного домену.

🔹 `RateTable` — read-only мапа «код валюти → курс відносно бази».
🔹 `RateSnapshot` — незмінний знімок: база + таблиця + час отримання.
🔹 `FetchStatus` — стан життєвого циклу завантаження курсів.
🔹 `IRatesProvider` / `IKeyValueStore` — контракти зовнішніх колабораторів.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, unique
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

# 🧩 Внутрішні модулі проєкту
from fxconv.shared.utils.immutables import freeze_rates


# ================================
# 🧾 АЛІАСИ
# ================================
CurrencyCode = str													# 🔤 ISO-4217-подібний код, регістр важливий
RateTable = Mapping[str, float]										# 💹 1 база = rate одиниць валюти

EMPTY_TABLE: RateTable = MappingProxyType({})


# ================================
# 🚦 СТАТУС ЗАВАНТАЖЕННЯ
# ================================
@unique
class FetchStatus(str, Enum):
    """Стан останнього запиту курсів."""
    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


# ================================
# 🧊 ЗНІМОК КУРСІВ
# ================================
@dataclass(frozen=True)
class RateSnapshot:
    """
    Незмінний знімок курсів для однієї бази.

    Таблиця заморожується в `__post_init__`, тому зовнішній код не може
    змінити курси знімка після створення. Новий fetch = новий обʼєкт.
    """

    base_currency: CurrencyCode
    table: RateTable
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        object.__setattr__(self, "table", freeze_rates(self.table))

    @property
    def currencies(self) -> Tuple[CurrencyCode, ...]:
        """Коди валют у порядку провайдера."""
        return tuple(self.table.keys())

    @property
    def is_empty(self) -> bool:
        return not self.table

    def age_seconds(self, now: Optional[datetime] = None) -> float:
        """Скільки секунд минуло з моменту отримання знімка."""
        current = now or datetime.now(timezone.utc)
        return (current - self.fetched_at).total_seconds()


# ================================
# 🔌 КОНТРАКТИ КОЛАБОРАТОРІВ
# ================================
class IRatesProvider(ABC):
    """
    📈 Джерело курсів: для бази повертає payload з `conversion_rates`.

    Помилки транспорту чи формату мають підніматися як `RateFetchError`.
    """

    @abstractmethod
    async def fetch(self, base_currency: CurrencyCode) -> Mapping[str, Any]:
        """Повертає payload провайдера (щонайменше ключ `conversion_rates`)."""

    async def close(self) -> None:
        """Звільняє мережеві ресурси (за замовчуванням нічого)."""
        return None


class IKeyValueStore(ABC):
    """💾 Персистентне сховище рядкових значень за ключем."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Значення або None, якщо ключа немає."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Записує значення та одразу зберігає його."""
