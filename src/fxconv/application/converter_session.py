# 🧭 fxconv/application/converter_session.py
"""
🧭 ConverterSession — межа між UI та ядром конвертера.

🔹 Зʼєднує PreferenceStore → RateStore → SyncController.
🔹 Зміна бази інвалідовує курси й запускає новий запит.
🔹 Кожна зміна RateStore передається контролеру як новий `RateContext`.
🔹 Список курсів ледачо запитує дані, якщо таблиця порожня.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio
import logging
from typing import Callable, List, Optional, Tuple

# 🧩 Внутрішні модулі проєкту
from fxconv.domain.converter import ConversionPair, RateContext, RateSummary, SyncController
from fxconv.domain.currency import CurrencyCode, CurrencyItem, FetchStatus, build_currency_list
from fxconv.infrastructure.currency.rate_store import RateStore
from fxconv.infrastructure.storage.preference_store import PreferenceStore
from fxconv.shared.utils.logger import LOG_NAME


logger = logging.getLogger(f"{LOG_NAME}.application.session")


class ConverterSession:
    """Один користувацький сеанс: поля конвертера, курси та налаштування."""

    def __init__(
        self,
        preferences: PreferenceStore,
        rate_store: RateStore,
        *,
        default_to_currency: CurrencyCode = "EUR",
        default_amount: str = "1",
        decimals: int = 2,
    ) -> None:
        self.preferences = preferences
        self.rate_store = rate_store
        self.controller = SyncController(
            ConversionPair(
                from_currency=preferences.base_currency,
                to_currency=default_to_currency,
                from_amount=default_amount,
            ),
            self._rate_context(),
            decimals=decimals,
        )
        self._unsubscribers: List[Callable[[], None]] = [
            rate_store.subscribe(self._on_rates_changed),
            preferences.subscribe(self._on_base_changed),
        ]

    # ================================
    # 🚀 ЖИТТЄВИЙ ЦИКЛ
    # ================================
    async def start(self) -> "asyncio.Task[None]":
        """Відновлює кеш і одразу запускає запит курсів для поточної бази."""
        await self.rate_store.initialize()
        return self.rate_store.request_rates(self.preferences.base_currency)

    async def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        await self.rate_store.close()

    # ================================
    # 🔍 СТАН ДЛЯ UI
    # ================================
    @property
    def pair(self) -> ConversionPair:
        return self.controller.pair

    @property
    def status(self) -> FetchStatus:
        return self.rate_store.status

    @property
    def error(self) -> Optional[str]:
        return self.rate_store.error

    def rate_summary(self) -> Optional[RateSummary]:
        return self.controller.rate_summary()

    def available_currencies(self) -> Tuple[CurrencyCode, ...]:
        self.rate_store.ensure_rates(self.preferences.base_currency)
        return tuple(self.rate_store.table.keys())

    def currency_list(self, search: str = "") -> List[CurrencyItem]:
        """Курси відносно бази знімка; улюблені першими."""
        self.rate_store.ensure_rates(self.preferences.base_currency)
        snapshot = self.rate_store.last_snapshot
        base = snapshot.base_currency if snapshot else self.preferences.base_currency
        return build_currency_list(self.rate_store.table, base, self.preferences.favorites, search)

    # ================================
    # ✍️ ДІЇ КОРИСТУВАЧА
    # ================================
    def edit_from(self, text: str) -> bool:
        return self.controller.edit_from(text)

    def edit_to(self, text: str) -> bool:
        return self.controller.edit_to(text)

    def select_from(self, code: CurrencyCode) -> None:
        self.controller.select_from(code)

    def select_to(self, code: CurrencyCode) -> None:
        self.controller.select_to(code)

    def swap(self) -> None:
        self.controller.swap()

    def toggle_favorite(self, code: CurrencyCode) -> bool:
        return self.preferences.toggle_favorite(code)

    async def set_base_currency(self, code: CurrencyCode) -> None:
        """Зберігає нову базу та чекає курси для неї."""
        self.preferences.set_base_currency(code)
        current = self.rate_store.snapshot
        if current is not None and current.base_currency == code:
            return
        await self.rate_store.request_rates(code)

    # ================================
    # 🔔 РЕАКЦІЇ НА ПОДІЇ
    # ================================
    def _rate_context(self) -> RateContext:
        snapshot = self.rate_store.last_snapshot
        return RateContext(
            status=self.rate_store.status,
            base_currency=snapshot.base_currency if snapshot else self.preferences.base_currency,
            table=self.rate_store.table,
        )

    def _on_rates_changed(self, _store: RateStore) -> None:
        self.controller.update_rates(self._rate_context())

    def _on_base_changed(self, code: CurrencyCode) -> None:
        self.rate_store.invalidate()
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("⚠️ Базу змінено поза event loop — курси для %s буде запитано пізніше.", code)
            return
        self.rate_store.request_rates(code)
