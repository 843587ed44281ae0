# 💱 fxconv/infrastructure/currency/__init__.py
"""
💱 Інфраструктура курсів валют.

🔹 `ExchangeRateApiClient` — HTTP-провайдер курсів.
🔹 `RatesCache` — файловий кеш останнього знімка.
🔹 `RateStore` — життєвий цикл завантаження курсів.
"""

from __future__ import annotations

from .exchange_rate_api import ExchangeRateApiClient
from .rates_cache import RatesCache, sanitize_rates
from .rate_store import RateStore

__all__ = ["ExchangeRateApiClient", "RatesCache", "RateStore", "sanitize_rates"]
