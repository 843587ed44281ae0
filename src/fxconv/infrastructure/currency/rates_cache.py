# 💾 fxconv/infrastructure/currency/rates_cache.py
"""
💾 Файловий кеш останнього успішного знімка курсів.

🔹 Формат: JSON `{"base_currency": ..., "fetched_at": ISO-8601, "rates": {...}}`.
🔹 Битий або відсутній файл → None (стартуємо без last-known даних).
🔹 Помилки запису логуються, але не зупиняють роботу.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import aiofiles														# 💽 Асинхронна робота з файлами

# 🔠 Системні імпорти
import json
import logging
import math
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

# 🧩 Внутрішні модулі проєкту
from fxconv.domain.currency.interfaces import RateSnapshot
from fxconv.shared.utils.logger import LOG_NAME


logger = logging.getLogger(f"{LOG_NAME}.infrastructure.rates_cache")


def sanitize_rates(raw: Mapping[Any, Any]) -> Dict[str, float]:
    """
    Лишає тільки пари «рядковий код → скінченне число».

    Нульові та відʼємні значення зберігаються: конвертер сам повертає 0 для них.
    """
    rates: Dict[str, float] = {}
    for code, value in raw.items():
        if not isinstance(code, str) or not code or isinstance(value, bool):
            continue
        if not isinstance(value, (int, float)):
            continue
        number = float(value)
        if math.isfinite(number):
            rates[code] = number
    return rates


class RatesCache:
    """Читає/пише останній знімок курсів у JSON-файл."""

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> Optional[RateSnapshot]:
        try:
            async with aiofiles.open(self._path, "r", encoding="utf-8") as f:
                content = await f.read()
            parsed = json.loads(content)
            if not isinstance(parsed, dict):
                raise ValueError("Очікувався обʼєкт у кеш-файлі курсів.")
            base = parsed.get("base_currency")
            rates = parsed.get("rates")
            if not isinstance(base, str) or not base or not isinstance(rates, dict):
                raise ValueError("У кеш-файлі немає base_currency/rates.")
            fetched_at = datetime.fromisoformat(str(parsed.get("fetched_at")))
            if fetched_at.tzinfo is None:
                fetched_at = fetched_at.replace(tzinfo=timezone.utc)
        except FileNotFoundError:
            logger.debug("📭 Кеш курсів ще не створено: %s", self._path)
            return None
        except (OSError, ValueError, TypeError) as e:
            logger.warning("⚠️ Не вдалося прочитати кеш курсів (%s). Ігнорую.", e)
            return None

        snapshot = RateSnapshot(base_currency=base, table=sanitize_rates(rates), fetched_at=fetched_at)
        logger.info("📖 Завантажено кеш курсів: base=%s, валют=%d", base, len(snapshot.table))
        return snapshot

    async def save(self, snapshot: RateSnapshot) -> None:
        payload = json.dumps(
            {
                "base_currency": snapshot.base_currency,
                "fetched_at": snapshot.fetched_at.isoformat(),
                "rates": dict(snapshot.table),
            },
            indent=2,
            ensure_ascii=False,
        )
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(self._path, "w", encoding="utf-8") as f:
                await f.write(payload)
            logger.debug("💾 Кеш курсів збережено: %s", self._path)
        except OSError as e:
            logger.error("❌ Помилка під час збереження кешу курсів: %s", e)
