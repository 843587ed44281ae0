# 💱 fxconv/domain/currency/__init__.py
"""
💱 Пакет `domain.currency` — контракти, конвертація та каталог валют.

🔹 `interfaces.py`: `RateTable`, `RateSnapshot`, `FetchStatus`, `IRatesProvider`, `IKeyValueStore`.
🔹 `conversion.py`: чиста функція `convert` та правила тексту сум.
🔹 `catalog.py`: назви валют і список курсів з улюбленими.
"""

from .interfaces import (
    EMPTY_TABLE,
    CurrencyCode,
    FetchStatus,
    IKeyValueStore,
    IRatesProvider,
    RateSnapshot,
    RateTable,
)
from .conversion import (
    convert,
    exchange_rate,
    format_amount,
    is_amount_text_valid,
    parse_amount,
)
from .catalog import CurrencyItem, build_currency_list, currency_name


# ================================
# 📤 ПУБЛІЧНИЙ API ПАКЕТА
# ================================
__all__ = [
    "EMPTY_TABLE",
    "CurrencyCode",
    "FetchStatus",
    "IKeyValueStore",
    "IRatesProvider",
    "RateSnapshot",
    "RateTable",
    "convert",
    "exchange_rate",
    "format_amount",
    "is_amount_text_valid",
    "parse_amount",
    "CurrencyItem",
    "build_currency_list",
    "currency_name",
]
