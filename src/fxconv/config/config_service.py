# ⚙️ fxconv/config/config_service.py
"""
⚙️ config_service.py — доступ до статичної конфігурації конвертера.

🔹 Клас `ConfigService`:
- Обʼєднує config.yaml, config.json (поруч з модулем) та змінні .env.
- Пріоритет: config.yaml → config.json → змінні середовища (останні перемагають).
- Єдиний метод .get("exchange_api.timeout_sec") для будь-якого параметра.
- Працює як Singleton.
"""

# 🌐 Зовнішні бібліотеки
import yaml                                  # 📦 YAML-парсинг
from dotenv import load_dotenv               # 🔐 Завантаження змінних із .env

# 🔠 Системні імпорти
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

# 🧩 Внутрішні модулі проєкту
from fxconv.shared.utils.logger import LOG_NAME


logger = logging.getLogger(f"{LOG_NAME}.config")

CONFIG_DIR = Path(__file__).parent

# 🔐 Змінна середовища → крапковий ключ конфігурації
ENV_KEYS: Dict[str, str] = {
    "EXCHANGE_RATE_API_KEY": "exchange_api.api_key",
    "FXCONV_API_URL": "exchange_api.base_url",
    "FXCONV_LOCALE": "preferences.locale",
    "FXCONV_PREFERENCES_FILE": "files.preferences",
    "FXCONV_RATES_CACHE_FILE": "files.rates_cache",
    "FXCONV_LOG_LEVEL": "logging.level",
}


# ============================
# ⚙️ СЕРВІС ДОСТУПУ ДО КОНФІГІВ
# ============================
class ConfigService:
    """
    ⚙️ Надає доступ до всіх параметрів конфігурації.
    Конфігурація зчитується лише один раз на процес.
    """

    _instance: Optional["ConfigService"] = None
    _config: Dict[str, Any]

    def __new__(cls) -> "ConfigService":
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._config = {}
            instance._load_all_configs()
            cls._instance = instance
            logger.debug("🔄 ConfigService створено, конфігурацію завантажено")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Скидає singleton (наступний виклик перечитає джерела)."""
        cls._instance = None

    def _load_all_configs(self) -> None:
        # --- 1. YAML-файл (дефолти) ---
        try:
            with open(CONFIG_DIR / "config.yaml", "r", encoding="utf-8") as f:
                self._deep_update(self._config, yaml.safe_load(f) or {})
        except (FileNotFoundError, yaml.YAMLError) as e:
            logger.warning("⚠️ Не вдалося завантажити config.yaml: %s", e)

        # --- 2. JSON-файл (локальні перевизначення, необовʼязковий) ---
        try:
            with open(CONFIG_DIR / "config.json", "r", encoding="utf-8") as f:
                self._deep_update(self._config, json.load(f))
        except FileNotFoundError:
            pass
        except json.JSONDecodeError as e:
            logger.warning("⚠️ Не вдалося завантажити config.json: %s", e)

        # --- 3. .env та змінні середовища ---
        load_dotenv()
        env_vars = {key: os.getenv(var) for var, key in ENV_KEYS.items() if os.getenv(var)}
        self._deep_update(self._config, self._unflatten_dict(env_vars))

        logger.debug("✅ Конфігурацію завантажено (розділів: %d)", len(self._config))

    def get(self, key: str, default: Any = None) -> Any:
        """
        🔑 Значення за крапковим ключем (наприклад: 'files.preferences').

        Args:
            key (str): Ключ у форматі з крапкою.
            default (Any): Значення, якщо ключ не знайдено.

        Returns:
            Any: Значення параметра або default.
        """
        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default
        return value

    # ===============================
    # 🔧 ДОПОМІЖНІ МЕТОДИ ЗЛИТТЯ КОНФІГІВ
    # ===============================
    @staticmethod
    def _unflatten_dict(d: Dict[str, Any]) -> Dict[str, Any]:
        """'exchange_api.api_key' → {'exchange_api': {'api_key': ...}}"""
        result: Dict[str, Any] = {}
        for key, value in d.items():
            parts = key.split(".")
            d_ref = result
            for part in parts[:-1]:
                d_ref = d_ref.setdefault(part, {})
            d_ref[parts[-1]] = value
        return result

    def _deep_update(self, source: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        """Рекурсивно зливає `overrides` у `source`."""
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(source.get(key), dict):
                self._deep_update(source[key], value)
            else:
                source[key] = value
