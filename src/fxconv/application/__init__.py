# 🧭 fxconv/application/__init__.py
"""🧭 Прикладний шар: сеанс конвертера."""

from .converter_session import ConverterSession

__all__ = ["ConverterSession"]
