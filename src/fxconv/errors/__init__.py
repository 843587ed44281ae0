# 🚨 fxconv/errors/__init__.py
"""🚨 Винятки застосунку."""

from .custom_errors import (
    AppError,
    ConfigurationError,
    ErrorCode,
    RateFetchError,
    UserVisibleError,
)

__all__ = [
    "AppError",
    "ConfigurationError",
    "ErrorCode",
    "RateFetchError",
    "UserVisibleError",
]
