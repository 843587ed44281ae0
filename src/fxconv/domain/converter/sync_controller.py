# 🔄 fxconv/domain/converter/sync_controller.py
"""
🔄 SyncController — двонаправлена синхронізація полів «з» та «в».

🔹 Одна пара (`ConversionPair`) з прапорцем авторитету `last_edited`.
🔹 Кожна дія користувача — явний перехід стану; перерахунок — чиста проєкція
   `project(pair, context)`, яка ніколи не змінює `last_edited`.
🔹 Поки курси не SUCCEEDED або таблиця порожня — поля лишаються як є.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from dataclasses import dataclass, field, replace
from enum import Enum, unique
from typing import Callable, FrozenSet, List, Optional

# 🧩 Внутрішні модулі проєкту
from fxconv.domain.currency.conversion import (
    DEFAULT_DECIMALS,
    convert,
    exchange_rate,
    format_amount,
    is_amount_text_valid,
    parse_amount,
)
from fxconv.domain.currency.interfaces import EMPTY_TABLE, CurrencyCode, FetchStatus, RateTable
from fxconv.shared.utils.immutables import freeze_rates, is_frozen_mapping
from fxconv.shared.utils.logger import LOG_NAME


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.domain.sync")


# ================================
# 🧱 СТАН
# ================================
@unique
class EditSide(str, Enum):
    """Яке поле тримає введену користувачем суму."""
    FROM = "from"
    TO = "to"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ConversionPair:
    """Два повʼязані поля суми та їхні валюти."""
    from_currency: CurrencyCode
    to_currency: CurrencyCode
    from_amount: str = "1"
    to_amount: str = ""
    last_edited: EditSide = EditSide.FROM


@dataclass(frozen=True)
class RateContext:
    """Все, що потрібно для перерахунку: статус, база та таблиця одного знімка."""
    status: FetchStatus = FetchStatus.IDLE
    base_currency: CurrencyCode = ""
    table: RateTable = field(default_factory=lambda: EMPTY_TABLE)

    def __post_init__(self) -> None:
        if not is_frozen_mapping(self.table):
            object.__setattr__(self, "table", freeze_rates(self.table))

    @property
    def is_ready(self) -> bool:
        return self.status is FetchStatus.SUCCEEDED and bool(self.table)

    @property
    def currencies(self) -> FrozenSet[CurrencyCode]:
        return frozenset(self.table.keys())


@dataclass(frozen=True)
class RateSummary:
    """Прямий та зворотний курс обраної пари (вже відформатовані)."""
    from_currency: CurrencyCode
    to_currency: CurrencyCode
    direct: str													# 1 from = direct to
    inverse: str												# 1 to = inverse from


PairListener = Callable[[ConversionPair], None]


# ================================
# 🧮 ПРОЄКЦІЯ
# ================================
def project(pair: ConversionPair, context: RateContext, decimals: int = DEFAULT_DECIMALS) -> ConversionPair:
    """
    Перераховує похідне поле з авторитетного.

    Порожнє авторитетне поле нічого не перераховує (користувач стер суму).
    """
    if not context.is_ready:
        return pair

    if pair.last_edited is EditSide.FROM:
        if not pair.from_amount:
            return pair
        result = convert(
            parse_amount(pair.from_amount),
            pair.from_currency,
            pair.to_currency,
            context.base_currency,
            context.table,
        )
        derived = format_amount(result, decimals)
        return pair if derived == pair.to_amount else replace(pair, to_amount=derived)

    if not pair.to_amount:
        return pair
    result = convert(
        parse_amount(pair.to_amount),
        pair.to_currency,
        pair.from_currency,
        context.base_currency,
        context.table,
    )
    derived = format_amount(result, decimals)
    return pair if derived == pair.from_amount else replace(pair, from_amount=derived)


# ================================
# 🎛️ КОНТРОЛЕР
# ================================
class SyncController:
    """
    Тримає `ConversionPair` та `RateContext`, застосовує переходи й перерахунок.

    Слухачі отримують нову пару після кожного переходу, що її змінив.
    """

    def __init__(
        self,
        pair: ConversionPair,
        context: Optional[RateContext] = None,
        *,
        decimals: int = DEFAULT_DECIMALS,
    ) -> None:
        self._pair = pair
        self._context = context or RateContext()
        self._decimals = decimals
        self._listeners: List[PairListener] = []
        self._recomputing = False									# 🔒 Захист від повторного входу
        self._apply_default_target(frozenset())
        self._recompute_and_notify(previous=None)

    # ================================
    # 🔍 СТАН
    # ================================
    @property
    def pair(self) -> ConversionPair:
        return self._pair

    @property
    def context(self) -> RateContext:
        return self._context

    def subscribe(self, listener: PairListener) -> Callable[[], None]:
        """Підписка на зміни пари; повертає функцію відписки."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ================================
    # ✏️ РЕДАГУВАННЯ СУМ
    # ================================
    def edit_from(self, text: str) -> bool:
        """Користувач ввів текст у поле «з». False — натискання відхилено."""
        return self._edit(EditSide.FROM, text)

    def edit_to(self, text: str) -> bool:
        """Користувач ввів текст у поле «в». False — натискання відхилено."""
        return self._edit(EditSide.TO, text)

    def _edit(self, side: EditSide, text: str) -> bool:
        if not is_amount_text_valid(text):
            logger.debug("⛔ Відхилено введення %r у поле %s", text, side)
            return False
        previous = self._pair
        if side is EditSide.FROM:
            self._pair = replace(previous, from_amount=text, last_edited=EditSide.FROM)
        else:
            self._pair = replace(previous, to_amount=text, last_edited=EditSide.TO)
        self._recompute_and_notify(previous)
        return True

    # ================================
    # 💱 ВИБІР ВАЛЮТ
    # ================================
    def select_from(self, code: CurrencyCode) -> None:
        previous = self._pair
        self._pair = replace(previous, from_currency=code)
        self._recompute_and_notify(previous)

    def select_to(self, code: CurrencyCode) -> None:
        previous = self._pair
        self._pair = replace(previous, to_currency=code)
        self._recompute_and_notify(previous)

    def swap(self) -> None:
        """
        Міняє валюти місцями; авторитетним стає поле «з».

        Сума «з» зберігається, поле «в» перераховується під нові коди.
        """
        previous = self._pair
        self._pair = replace(
            previous,
            from_currency=previous.to_currency,
            to_currency=previous.from_currency,
            last_edited=EditSide.FROM,
        )
        logger.debug("🔀 Swap %s ⇄ %s", previous.from_currency, previous.to_currency)
        self._recompute_and_notify(previous)

    # ================================
    # 💹 ОНОВЛЕННЯ КУРСІВ
    # ================================
    def update_rates(self, context: RateContext) -> None:
        """Новий статус / база / таблиця. Застосовує правило валюти за замовчуванням."""
        previous = self._pair
        old_codes = self._context.currencies
        self._context = context
        self._apply_default_target(old_codes)
        self._recompute_and_notify(previous)

    def recompute(self) -> None:
        """Явний перерахунок без нових вхідних даних (фіксована точка)."""
        self._recompute_and_notify(self._pair)

    # ================================
    # 📊 КУРС ПАРИ
    # ================================
    def rate_summary(self) -> Optional[RateSummary]:
        """Курс 1 from → to та зворотний; None, поки курси не готові."""
        if not self._context.is_ready:
            return None
        pair, ctx = self._pair, self._context
        return RateSummary(
            from_currency=pair.from_currency,
            to_currency=pair.to_currency,
            direct=format_amount(
                exchange_rate(pair.from_currency, pair.to_currency, ctx.base_currency, ctx.table),
                self._decimals,
            ),
            inverse=format_amount(
                exchange_rate(pair.to_currency, pair.from_currency, ctx.base_currency, ctx.table),
                self._decimals,
            ),
        )

    # ================================
    # 🔒 ВНУТРІШНЄ
    # ================================
    def _apply_default_target(self, old_codes: FrozenSet[CurrencyCode]) -> None:
        """Якщо набір кодів змінився і цільової валюти в ньому немає, обирає першу доступну."""
        codes = tuple(self._context.table.keys())
        if codes and frozenset(codes) != old_codes and self._pair.to_currency not in self._context.table:
            logger.info("🎯 Валюта %s недоступна, обрано %s", self._pair.to_currency, codes[0])
            self._pair = replace(self._pair, to_currency=codes[0])

    def _recompute_and_notify(self, previous: Optional[ConversionPair]) -> None:
        if self._recomputing:
            return
        self._recomputing = True
        try:
            self._pair = project(self._pair, self._context, self._decimals)
        finally:
            self._recomputing = False

        if previous is not None and self._pair == previous:
            return
        for listener in list(self._listeners):
            listener(self._pair)
