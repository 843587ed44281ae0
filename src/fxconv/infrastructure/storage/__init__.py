# 🗄️ fxconv/infrastructure/storage/__init__.py
"""🗄️ Персистентні налаштування користувача."""

from .json_storage import JsonFileKeyValueStore
from .preference_store import PreferenceStore, default_base_for_locale, detect_locale

__all__ = ["JsonFileKeyValueStore", "PreferenceStore", "default_base_for_locale", "detect_locale"]
