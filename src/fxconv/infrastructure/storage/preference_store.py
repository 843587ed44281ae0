# ⭐ fxconv/infrastructure/storage/preference_store.py
"""
⭐ PreferenceStore — базова валюта та улюблені валюти користувача.

🔹 Завантажується один раз на старті з key-value сховища.
🔹 Кожна зміна (`set_base_currency`, `toggle_favorite`) одразу зберігається.
🔹 Битий JSON улюблених валют → порожній набір, а не помилка старту.
🔹 Зміна бази сповіщає слухачів: курси старої бази вже не актуальні.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import json
import locale as locale_module
import logging
import os
from typing import Callable, FrozenSet, List, Optional, Tuple

# 🧩 Внутрішні модулі проєкту
from fxconv.domain.currency.interfaces import CurrencyCode, IKeyValueStore
from fxconv.shared.utils.logger import LOG_NAME


# ================================
# 🧾 ЛОГЕР ТА КОНСТАНТИ
# ================================
logger = logging.getLogger(f"{LOG_NAME}.infrastructure.preferences")

BASE_CURRENCY_KEY = "baseCurrency"
FAVORITES_KEY = "favoriteCurrencies"
DEFAULT_CURRENCY = "USD"
DEFAULT_RUSSIAN_CURRENCY = "RUB"

BaseListener = Callable[[CurrencyCode], None]


# ================================
# 🌍 ЛОКАЛЬ
# ================================
def detect_locale() -> str:
    """Мова середовища: FXCONV_LOCALE → LC_ALL → LANG → системна локаль."""
    for var in ("FXCONV_LOCALE", "LC_ALL", "LANG"):
        value = os.environ.get(var)
        if value:
            return value
    system_locale, _ = locale_module.getlocale()
    return system_locale or ""


def default_base_for_locale(
    locale: Optional[str],
    *,
    default_currency: str = DEFAULT_CURRENCY,
    russian_currency: str = DEFAULT_RUSSIAN_CURRENCY,
) -> CurrencyCode:
    """Для російськомовного середовища — RUB, інакше — USD."""
    return russian_currency if "ru" in (locale or "").lower() else default_currency


def _parse_favorites(raw: Optional[str]) -> Tuple[CurrencyCode, ...]:
    """JSON-масив рядків → кортеж без дублікатів; будь-що інше → порожньо."""
    if not raw:
        return ()
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("⚠️ Улюблені валюти пошкоджені (не JSON) — скидаю до порожнього набору.")
        return ()
    if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
        logger.warning("⚠️ Улюблені валюти мають неочікуваний формат — скидаю до порожнього набору.")
        return ()
    return tuple(dict.fromkeys(parsed))


# ================================
# ⭐ СХОВИЩЕ НАЛАШТУВАНЬ
# ================================
class PreferenceStore:
    """Налаштування користувача, що живуть між запусками."""

    def __init__(
        self,
        storage: IKeyValueStore,
        base_currency: CurrencyCode,
        favorites: Tuple[CurrencyCode, ...] = (),
    ) -> None:
        self._storage = storage
        self._base_currency = base_currency
        self._favorites: List[CurrencyCode] = list(favorites)			# 📋 Порядок додавання зберігається
        self._listeners: List[BaseListener] = []

    @classmethod
    def load(
        cls,
        storage: IKeyValueStore,
        *,
        locale: Optional[str] = None,
        default_currency: str = DEFAULT_CURRENCY,
        russian_currency: str = DEFAULT_RUSSIAN_CURRENCY,
    ) -> "PreferenceStore":
        """Читає базу та улюблені зі сховища, решту добирає з локалі."""
        base = storage.get(BASE_CURRENCY_KEY)
        if not base:
            base = default_base_for_locale(
                locale if locale is not None else detect_locale(),
                default_currency=default_currency,
                russian_currency=russian_currency,
            )
            logger.info("🌍 Базова валюта за локаллю: %s", base)
        favorites = _parse_favorites(storage.get(FAVORITES_KEY))
        logger.debug("⭐ Налаштування завантажено: base=%s favorites=%s", base, favorites)
        return cls(storage, base, favorites)

    # ================================
    # 🔍 СТАН
    # ================================
    @property
    def base_currency(self) -> CurrencyCode:
        return self._base_currency

    @property
    def favorites(self) -> FrozenSet[CurrencyCode]:
        return frozenset(self._favorites)

    @property
    def ordered_favorites(self) -> Tuple[CurrencyCode, ...]:
        return tuple(self._favorites)

    def is_favorite(self, code: CurrencyCode) -> bool:
        return code in self._favorites

    def subscribe(self, listener: BaseListener) -> Callable[[], None]:
        """Слухач зміни бази; повертає функцію відписки."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ================================
    # ✍️ ДІЇ КОРИСТУВАЧА
    # ================================
    def set_base_currency(self, code: CurrencyCode) -> None:
        """Перезаписує базу та одразу зберігає; слухачі — лише якщо база змінилася."""
        previous = self._base_currency
        self._base_currency = code
        self._persist(BASE_CURRENCY_KEY, code)
        if code == previous:
            return
        logger.info("🏦 Базову валюту змінено: %s → %s", previous, code)
        for listener in list(self._listeners):
            listener(code)

    def toggle_favorite(self, code: CurrencyCode) -> bool:
        """Додає або прибирає валюту з улюблених; повертає нову належність."""
        if code in self._favorites:
            self._favorites.remove(code)
            is_favorite = False
        else:
            self._favorites.append(code)
            is_favorite = True
        self._persist(FAVORITES_KEY, json.dumps(self._favorites))
        logger.info("⭐ %s %s улюблених", code, "додано до" if is_favorite else "прибрано з")
        return is_favorite

    def _persist(self, key: str, value: str) -> None:
        try:
            self._storage.set(key, value)
        except OSError as e:
            logger.error("❌ Не вдалося зберегти налаштування %s: %s", key, e)
