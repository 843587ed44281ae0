# 📋 fxconv/domain/currency/catalog.py
"""
📋 Каталог валют: назви, пошук та сортування списку курсів.

🔹 База виключається зі списку (її курс завжди 1).
🔹 Улюблені валюти йдуть першими, далі — за алфавітом коду.
🔹 Пошук без урахування регістру за кодом і назвою.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import math
from dataclasses import dataclass
from typing import Collection, Dict, List

# 🧩 Внутрішні модулі проєкту
from fxconv.domain.currency.interfaces import CurrencyCode, RateTable


# ================================
# 🏷️ НАЗВИ ВАЛЮТ
# ================================
CURRENCY_NAMES: Dict[str, str] = {
    "AED": "UAE Dirham",
    "ARS": "Argentine Peso",
    "AUD": "Australian Dollar",
    "BGN": "Bulgarian Lev",
    "BRL": "Brazilian Real",
    "BYN": "Belarusian Ruble",
    "CAD": "Canadian Dollar",
    "CHF": "Swiss Franc",
    "CNY": "Chinese Yuan",
    "CZK": "Czech Koruna",
    "DKK": "Danish Krone",
    "EUR": "Euro",
    "GBP": "British Pound",
    "GEL": "Georgian Lari",
    "HKD": "Hong Kong Dollar",
    "HUF": "Hungarian Forint",
    "ILS": "Israeli New Shekel",
    "INR": "Indian Rupee",
    "JPY": "Japanese Yen",
    "KRW": "South Korean Won",
    "KZT": "Kazakhstani Tenge",
    "MXN": "Mexican Peso",
    "NOK": "Norwegian Krone",
    "NZD": "New Zealand Dollar",
    "PLN": "Polish Zloty",
    "RON": "Romanian Leu",
    "RUB": "Russian Ruble",
    "SEK": "Swedish Krona",
    "SGD": "Singapore Dollar",
    "THB": "Thai Baht",
    "TRY": "Turkish Lira",
    "UAH": "Ukrainian Hryvnia",
    "USD": "US Dollar",
    "UZS": "Uzbekistani Som",
    "ZAR": "South African Rand",
}


def currency_name(code: CurrencyCode) -> str:
    """Людська назва валюти або сам код, якщо назва невідома."""
    return CURRENCY_NAMES.get(code, code)


# ================================
# 📦 DTO
# ================================
@dataclass(frozen=True)
class CurrencyItem:
    """Рядок списку курсів."""
    code: CurrencyCode
    name: str
    rate: float													# 💹 1 база = rate code
    reverse_rate: float											# 🔁 1 code = reverse_rate бази
    is_favorite: bool


def _reverse(rate: float) -> float:
    return 1.0 / rate if math.isfinite(rate) and rate > 0 else 0.0


def build_currency_list(
    table: RateTable,
    base_currency: CurrencyCode,
    favorites: Collection[CurrencyCode],
    search: str = "",
) -> List[CurrencyItem]:
    """Будує відсортований список валют для показу курсів відносно бази."""
    term = (search or "").strip().lower()
    items: List[CurrencyItem] = []
    for code, raw_rate in table.items():
        if code == base_currency:
            continue
        name = currency_name(code)
        if term and term not in code.lower() and term not in name.lower():
            continue
        rate = float(raw_rate)
        items.append(
            CurrencyItem(
                code=code,
                name=name,
                rate=rate,
                reverse_rate=_reverse(rate),
                is_favorite=code in favorites,
            )
        )
    items.sort(key=lambda item: (not item.is_favorite, item.code))
    return items
