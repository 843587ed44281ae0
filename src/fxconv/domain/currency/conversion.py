# 🔁 fxconv/domain/currency/conversion.py
"""
🔁 Чисті функції конвертації валют через базову валюту.

🔹 `convert` рахує крос-курс через базу; відсутній/невалідний курс → 0.0 (без винятків).
🔹 `is_amount_text_valid` / `parse_amount` / `format_amount` — правила тексту полів суми.
🔹 Жодного стану: однакові входи → однаковий результат.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
import math
import re
from typing import Any, Optional

# 🧩 Внутрішні модулі проєкту
from fxconv.domain.currency.interfaces import CurrencyCode, RateTable
from fxconv.shared.utils.logger import LOG_NAME


# ================================
# 🧾 ЛОГЕР ТА КОНСТАНТИ
# ================================
logger = logging.getLogger(f"{LOG_NAME}.domain.conversion")

AMOUNT_TEXT_PATTERN = re.compile(r"\d*[,.]?\d*", re.ASCII)					# 🔎 ASCII-цифри + не більше одного роздільника
DEFAULT_DECIMALS = 2


# ================================
# 🧰 ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _usable_rate(table: RateTable, code: CurrencyCode) -> Optional[float]:
    """Курс валюти, якщо він існує, скінченний та > 0; інакше None."""
    raw: Any = table.get(code)
    if raw is None or isinstance(raw, bool):
        return None
    try:
        rate = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(rate) or rate <= 0:
        return None
    return rate


# ================================
# 💱 КОНВЕРТАЦІЯ
# ================================
def convert(
    amount: float,
    from_currency: CurrencyCode,
    to_currency: CurrencyCode,
    base_currency: CurrencyCode,
    table: RateTable,
) -> float:
    """
    Конвертує суму між двома валютами за таблицею курсів відносно бази.

    Правила:
        • from == to → сума без змін (таблиця не читається);
        • from == base → amount * table[to];
        • to == base → amount / table[from];
        • інакше через базу: amount / table[from] * table[to].

    Курс, що бере участь у формулі, але відсутній, нульовий, відʼємний чи
    нескінченний, дає результат 0.0.
    """
    if from_currency == to_currency:
        return amount

    from_rate = 1.0 if from_currency == base_currency else _usable_rate(table, from_currency)
    to_rate = 1.0 if to_currency == base_currency else _usable_rate(table, to_currency)

    if from_rate is None or to_rate is None:
        logger.debug(
            "⚠️ Немає валідного курсу: %s → %s (base=%s), повертаю 0",
            from_currency,
            to_currency,
            base_currency,
        )
        return 0.0

    if from_currency == base_currency:
        return amount * to_rate
    if to_currency == base_currency:
        return amount / from_rate
    return (amount / from_rate) * to_rate


def exchange_rate(
    from_currency: CurrencyCode,
    to_currency: CurrencyCode,
    base_currency: CurrencyCode,
    table: RateTable,
) -> float:
    """Скільки одиниць `to_currency` дають за 1 `from_currency`."""
    return convert(1.0, from_currency, to_currency, base_currency, table)


# ================================
# ✏️ ТЕКСТ ПОЛІВ СУМИ
# ================================
def is_amount_text_valid(text: str) -> bool:
    """True для "", "12", "12.", "12,5", ".5"; False для "1.2.3", "-1", "abc"."""
    return AMOUNT_TEXT_PATTERN.fullmatch(text or "") is not None


def parse_amount(text: Optional[str]) -> float:
    """Розбирає суму; кома = крапка, нерозбірний текст → 0.0."""
    normalized = (text or "").strip().replace(",", ".")
    try:
        value = float(normalized)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def format_amount(value: float, decimals: int = DEFAULT_DECIMALS) -> str:
    """Фіксована кількість знаків після крапки: 9 → "9.00"."""
    return f"{value:.{max(0, int(decimals))}f}"
