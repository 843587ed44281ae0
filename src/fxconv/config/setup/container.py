# 📦 fxconv/config/setup/container.py
"""
📦 Контейнер залежностей конвертера.

🔹 Створює сервіси в порядку DI: сховище → налаштування → провайдер → RateStore → сеанс.
🔹 Усі параметри беруться з `ConfigService` (або будь-якого обʼєкта з `.get`).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from typing import TYPE_CHECKING, Any, Optional

# 🧩 Внутрішні модулі проєкту
from fxconv.application.converter_session import ConverterSession
from fxconv.domain.currency.interfaces import IKeyValueStore, IRatesProvider
from fxconv.infrastructure.currency.exchange_rate_api import ExchangeRateApiClient
from fxconv.infrastructure.currency.rate_store import RateStore
from fxconv.infrastructure.currency.rates_cache import RatesCache
from fxconv.infrastructure.storage.json_storage import JsonFileKeyValueStore
from fxconv.infrastructure.storage.preference_store import PreferenceStore
from fxconv.shared.utils.logger import LOG_NAME, init_logging_from_config

if TYPE_CHECKING:
    from fxconv.config.config_service import ConfigService

logger = logging.getLogger(f"{LOG_NAME}.container")


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _int_or_default(value: Any, default: int) -> int:
    """Повертає ціле число або запасне значення, якщо каст неможливий."""
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def bootstrap_logging(config: Optional["ConfigService"] = None) -> logging.Logger:
    """Зчитує вузол `logging` і запускає кореневий логер."""
    if config is None:
        from fxconv.config.config_service import ConfigService   # 🧭 Локальний імпорт для уникнення циклів

        config = ConfigService()
    return init_logging_from_config(config.get("logging", {}) or {})


# ================================
# 🏛️ КОНТЕЙНЕР ЗАЛЕЖНОСТЕЙ
# ================================
class Container:
    """Збирає ядро конвертера з конфігурації; провайдера та сховище можна підмінити."""

    def __init__(
        self,
        config: Any,
        *,
        provider: Optional[IRatesProvider] = None,
        storage: Optional[IKeyValueStore] = None,
    ) -> None:
        self.config = config
        logger.debug("🚀 Стартуємо побудову контейнера залежностей")

        self.storage: IKeyValueStore = storage or JsonFileKeyValueStore(
            config.get("files.preferences", "data/preferences.json")
        )
        self.preferences = PreferenceStore.load(
            self.storage,
            locale=config.get("preferences.locale"),
            default_currency=config.get("preferences.default_currency", "USD") or "USD",
            russian_currency=config.get("preferences.russian_locale_currency", "RUB") or "RUB",
        )

        self.provider: IRatesProvider = provider or ExchangeRateApiClient.from_config(config)
        cache_path = config.get("files.rates_cache")
        self.rates_cache: Optional[RatesCache] = RatesCache(cache_path) if cache_path else None
        self.rate_store = RateStore(
            self.provider,
            cache=self.rates_cache,
            ttl_sec=_int_or_default(config.get("exchange_api.ttl_sec"), 3600),
        )

        self.session = ConverterSession(
            self.preferences,
            self.rate_store,
            default_to_currency=config.get("converter.default_to_currency", "EUR") or "EUR",
            default_amount=str(config.get("converter.default_amount", "1")),
            decimals=_int_or_default(config.get("converter.decimals"), 2),
        )
        logger.debug("✅ Контейнер готовий (base=%s)", self.preferences.base_currency)
