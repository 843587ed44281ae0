# 🗄️ fxconv/infrastructure/storage/json_storage.py
"""
🗄️ Просте key-value сховище в одному JSON-файлі (аналог localStorage).

🔹 Значення — рядки; файл читається один раз і переписується на кожен `set`.
🔹 Битий файл вважається порожнім сховищем.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

# 🧩 Внутрішні модулі проєкту
from fxconv.domain.currency.interfaces import IKeyValueStore
from fxconv.shared.utils.logger import LOG_NAME


logger = logging.getLogger(f"{LOG_NAME}.infrastructure.storage")


class JsonFileKeyValueStore(IKeyValueStore):
    """💾 Синхронне сховище: `get` з памʼяті, `set` одразу пише файл."""

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)
        self._data: Dict[str, str] = self._read()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._write()

    def _read(self) -> Dict[str, str]:
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                parsed = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("⚠️ Не вдалося прочитати %s: %s. Стартую з порожнього сховища.", self._path, e)
            return {}
        if not isinstance(parsed, dict):
            logger.warning("⚠️ %s містить не обʼєкт — ігнорую.", self._path)
            return {}
        return {str(k): v for k, v in parsed.items() if isinstance(v, str)}

    def _write(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, self._path)							# 🔁 Атомарна заміна файлу
        logger.debug("💾 Сховище збережено: %s", self._path)
