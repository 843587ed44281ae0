# 🚨 fxconv/errors/custom_errors.py
"""
🚨 Ієрархія винятків конвертера валют.

🔹 `AppError` — базовий виняток застосунку (message + details).
🔹 `UserVisibleError` — помилки, текст яких можна показати користувачу.
🔹 `RateFetchError` — збій отримання курсів (мережа, HTTP-статус, формат відповіді).
🔹 `ConfigurationError` — відсутній або некоректний параметр конфігурації.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from typing import Dict, Optional

# 🧩 Внутрішні модулі проєкту
from fxconv.shared.utils.logger import LOG_NAME


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.errors")


# ================================
# ⚠️ КОДИ ПОМИЛОК
# ================================
class ErrorCode:
    """Категорії помилок для логів."""

    NETWORK = "network_error"											# 🌐 Транспорт / HTTP
    PAYLOAD = "payload_error"											# 📄 Некоректна відповідь провайдера
    CONFIG = "config_error"											# ⚙️ Конфігурація
    UNKNOWN = "unknown_error"


# ================================
# 🧠 БАЗОВІ ВИНЯТКИ
# ================================
class AppError(Exception):
    """Базовий виняток fxconv."""

    code: str = ErrorCode.UNKNOWN

    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_log_extra(self) -> Dict[str, object]:
        """📦 Словник для `logger.*(extra=...)`."""
        extra: Dict[str, object] = {"error_code": self.code}
        if self.details:
            extra["details"] = self.details
        return extra


class UserVisibleError(AppError):
    """Помилка, повідомлення якої безпечно показати в UI."""


# ================================
# 🌐 ПОМИЛКИ ОТРИМАННЯ КУРСІВ
# ================================
class RateFetchError(UserVisibleError):
    """🌐 Курси не отримано: мережа, HTTP-статус або формат відповіді."""

    code = ErrorCode.NETWORK

    def __init__(
        self,
        message: str,
        *,
        details: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        base_currency: Optional[str] = None,
        code: Optional[str] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.url = url													# 🔗 URL без API-ключа
        self.status_code = status_code									# 🔢 HTTP-код, якщо був
        self.base_currency = base_currency								# 💱 База, для якої запитували курси
        if code:
            self.code = code
        logger.debug(
            "🌐 RateFetchError created",
            extra={"url": url, "status_code": status_code, "base_currency": base_currency},
        )

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.url:
            extra["url"] = self.url
        if self.status_code is not None:
            extra["status_code"] = self.status_code
        if self.base_currency:
            extra["base_currency"] = self.base_currency
        return extra


class ConfigurationError(AppError):
    """⚙️ Обовʼязковий параметр конфігурації відсутній або невалідний."""

    code = ErrorCode.CONFIG

    def __init__(self, key: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"Config '{key}' is required.", details=key)
        self.key = key


# ================================
# 📤 ПУБЛІЧНИЙ API
# ================================
__all__ = [
    "ErrorCode",
    "AppError",
    "UserVisibleError",
    "RateFetchError",
    "ConfigurationError",
]
