# 🏦 fxconv/infrastructure/currency/rate_store.py
"""
🏦 RateStore — життєвий цикл таблиці курсів для однієї бази.

🎯 Призначення:
    • запускає асинхронне отримання курсів і тримає статус IDLE/LOADING/SUCCEEDED/FAILED;
    • замінює знімок цілком (RateSnapshot) лише результатом найсвіжішого запиту;
    • при збої зберігає попередній знімок і записує повідомлення про помилку;
    • відновлює останній знімок з кеш-файлу на старті (не як свіжі дані).

⚙️ Нотатки:
    • один потік подій (asyncio), блокування не потрібні;
    • кожен запит отримує монотонний `request_id`; застарілі відповіді відкидаються.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio
import contextlib
import logging
from datetime import datetime
from typing import Callable, List, Mapping, Optional, Set

# 🧩 Внутрішні модулі проєкту
from fxconv.domain.currency.interfaces import (
    EMPTY_TABLE,
    CurrencyCode,
    FetchStatus,
    IRatesProvider,
    RateSnapshot,
    RateTable,
)
from fxconv.errors import ErrorCode, RateFetchError
from fxconv.infrastructure.currency.rates_cache import RatesCache, sanitize_rates
from fxconv.shared.utils.logger import LOG_NAME


logger = logging.getLogger(f"{LOG_NAME}.infrastructure.rate_store")

StoreListener = Callable[["RateStore"], None]


class RateStore:
    """
    🏦 Тримає поточний знімок курсів та стан його завантаження.

    Слухачі (`subscribe`) викликаються після кожної зміни статусу чи знімка.
    """

    def __init__(
        self,
        provider: IRatesProvider,
        *,
        cache: Optional[RatesCache] = None,
        ttl_sec: int = 600,
    ) -> None:
        self._provider = provider
        self._cache = cache
        self._ttl_sec = max(0, int(ttl_sec or 0))

        # ── Стан ────────────────────────────────────────────────────────────
        self._status: FetchStatus = FetchStatus.IDLE
        self._snapshot: Optional[RateSnapshot] = None				# 🧊 Останній відомий знімок
        self._error: Optional[str] = None
        self._request_id = 0										# 🔢 Монотонний номер запиту
        self._pending_base: Optional[CurrencyCode] = None
        self._task: Optional["asyncio.Task[None]"] = None
        self._tasks: Set["asyncio.Task[None]"] = set()				# 🧵 Усі запити в польоті, включно із застарілими
        self._listeners: List[StoreListener] = []

    # ================================
    # 🔍 СТАН
    # ================================
    @property
    def status(self) -> FetchStatus:
        return self._status

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def snapshot(self) -> Optional[RateSnapshot]:
        """Поточний знімок — лише коли статус SUCCEEDED."""
        return self._snapshot if self._status is FetchStatus.SUCCEEDED else None

    @property
    def last_snapshot(self) -> Optional[RateSnapshot]:
        """Останній відомий знімок (може бути застарілим)."""
        return self._snapshot

    @property
    def table(self) -> RateTable:
        """Таблиця останнього знімка або порожня мапа."""
        return self._snapshot.table if self._snapshot else EMPTY_TABLE

    @property
    def pending_base(self) -> Optional[CurrencyCode]:
        return self._pending_base

    def is_fresh(self, now: Optional[datetime] = None) -> bool:
        """True, якщо знімок поточний і TTL ще не минув."""
        current = self.snapshot
        if current is None:
            return False
        return current.age_seconds(now) < self._ttl_sec

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ================================
    # 🚀 ЖИТТЄВИЙ ЦИКЛ
    # ================================
    async def initialize(self) -> None:
        """Підтягує last-known знімок з кеш-файлу; статус лишається IDLE."""
        if self._cache is None or self._snapshot is not None:
            return
        cached = await self._cache.load()
        if cached is not None and self._snapshot is None:
            self._snapshot = cached
            logger.info("📖 Відновлено останні курси для %s (не свіжі).", cached.base_currency)
            self._notify()

    async def close(self) -> None:
        """Скасовує всі запити в польоті та закриває провайдера."""
        pending = [task for task in self._tasks if not task.done()]
        for task in pending:
            task.cancel()
        for task in pending:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._tasks.clear()
        await self._provider.close()

    # ================================
    # 🔄 ЗАПИТИ КУРСІВ
    # ================================
    def request_rates(self, base_currency: CurrencyCode) -> "asyncio.Task[None]":
        """
        Запускає отримання курсів для бази (викликати всередині event loop).

        Повторний виклик для тієї ж бази під час LOADING повертає той самий
        запит. Новий запит для іншої бази робить попередній застарілим.
        """
        task = self._task
        if (
            self._status is FetchStatus.LOADING
            and self._pending_base == base_currency
            and task is not None
            and not task.done()
        ):
            logger.debug("⏳ Запит курсів для %s уже виконується.", base_currency)
            return task

        self._request_id += 1
        request_id = self._request_id
        self._pending_base = base_currency
        self._status = FetchStatus.LOADING
        logger.info("🔄 Запит курсів #%d для %s", request_id, base_currency)

        loop = asyncio.get_running_loop()
        self._task = loop.create_task(
            self._run_fetch(request_id, base_currency),
            name=f"fxconv-rates-{request_id}",
        )
        self._tasks.add(self._task)
        self._task.add_done_callback(self._tasks.discard)
        self._notify()
        return self._task

    async def refresh(self, base_currency: CurrencyCode) -> None:
        """Запускає (або приєднується до) запиту й чекає його завершення."""
        await self.request_rates(base_currency)

    def ensure_rates(self, base_currency: CurrencyCode) -> Optional["asyncio.Task[None]"]:
        """
        Ледачий тригер: запит лише коли таблиця порожня.

        Статус FAILED сам по собі нічого не запускає, тому постійна помилка
        не перетворюється на нескінченні повтори.
        """
        if self._snapshot is not None and not self._snapshot.is_empty:
            return None
        if self._status is FetchStatus.LOADING:
            return self._task
        logger.debug("📭 Таблиця курсів порожня — запускаю запит для %s", base_currency)
        return self.request_rates(base_currency)

    def invalidate(self) -> None:
        """Курси більше не відповідають базі: SUCCEEDED/LOADING → IDLE, відповіді в польоті застарілі."""
        self._request_id += 1
        self._pending_base = None
        if self._status in (FetchStatus.SUCCEEDED, FetchStatus.LOADING):
            logger.info("♻️ Знімок курсів для %s інвалідовано.", self._snapshot.base_currency if self._snapshot else "-")
            self._status = FetchStatus.IDLE
            self._notify()

    # ================================
    # 🔒 ВНУТРІШНЯ ЛОГІКА
    # ================================
    async def _run_fetch(self, request_id: int, base_currency: CurrencyCode) -> None:
        try:
            payload = await self._provider.fetch(base_currency)
            rates = self._extract_rates(payload, base_currency)
        except RateFetchError as exc:
            self._fail(request_id, exc.message, exc.to_log_extra())
            return
        except Exception as exc:									# noqa: BLE001
            logger.exception("🔥 Неочікувана помилка провайдера курсів")
            self._fail(request_id, str(exc) or type(exc).__name__, {"error_code": ErrorCode.UNKNOWN})
            return

        if request_id != self._request_id:
            logger.info("🗑️ Відповідь #%d для %s застаріла — відкинуто.", request_id, base_currency)
            return

        snapshot = RateSnapshot(base_currency=base_currency, table=rates)
        self._snapshot = snapshot									# 🧊 Атомарна заміна знімка
        self._status = FetchStatus.SUCCEEDED
        self._error = None
        self._pending_base = None
        logger.info("✅ Курси #%d для %s оновлено (%d валют).", request_id, base_currency, len(rates))
        self._notify()

        if self._cache is not None:
            await self._cache.save(snapshot)

    def _fail(self, request_id: int, message: str, extra: Mapping[str, object]) -> None:
        if request_id != self._request_id:
            logger.info("🗑️ Помилка застарілого запиту #%d проігнорована: %s", request_id, message)
            return
        self._status = FetchStatus.FAILED
        self._error = message
        self._pending_base = None
        logger.warning("⚠️ Не вдалося отримати курси: %s", message, extra=dict(extra))
        self._notify()

    @staticmethod
    def _extract_rates(payload: Mapping[str, object], base_currency: CurrencyCode) -> dict:
        raw = payload.get("conversion_rates") if isinstance(payload, Mapping) else None
        if not isinstance(raw, Mapping):
            raise RateFetchError(
                "Payload has no 'conversion_rates' object",
                base_currency=base_currency,
                code=ErrorCode.PAYLOAD,
            )
        rates = sanitize_rates(raw)
        if not rates:
            raise RateFetchError(
                "Payload contains no usable rates",
                base_currency=base_currency,
                code=ErrorCode.PAYLOAD,
            )
        return rates

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
