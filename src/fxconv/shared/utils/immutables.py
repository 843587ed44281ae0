# 🧊 fxconv/shared/utils/immutables.py
"""
🧊 Read-only таблиці курсів для знімків.

🔹 `freeze_rates` копіює будь-який Mapping у новий dict і загортає його в MappingProxyType.
🔹 Значення, що не є числом (None, рядок, bool), у таблицю не потрапляють.
🔹 Оригінальна мапа після цього може змінюватися, знімок лишається незмінним.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict

# ================================
# 🧾 АЛІАСИ
# ================================
FrozenMapping = MappingProxyType


def freeze_rates(rates: Mapping) -> "FrozenMapping[str, float]":
    """Копіює числові курси у новий dict і повертає його read-only представлення."""
    frozen: Dict[str, float] = {}
    for code, rate in rates.items():
        if isinstance(rate, bool) or not isinstance(rate, (int, float)):
            continue										# ⛔ Невалідний курс = відсутній курс
        frozen[str(code)] = float(rate)
    return FrozenMapping(frozen)


def is_frozen_mapping(obj: Any) -> bool:
    """Чи є обʼєкт уже замороженою мапою."""
    return isinstance(obj, FrozenMapping)
