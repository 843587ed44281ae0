# ⚙️ fxconv/config/__init__.py
"""⚙️ Конфігурація застосунку."""

from .config_service import ConfigService

__all__ = ["ConfigService"]
