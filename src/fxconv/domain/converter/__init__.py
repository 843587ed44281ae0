# 🔄 fxconv/domain/converter/__init__.py
"""🔄 Синхронізація двох повʼязаних полів конвертера."""

from .sync_controller import (
    ConversionPair,
    EditSide,
    RateContext,
    RateSummary,
    SyncController,
    project,
)

__all__ = [
    "ConversionPair",
    "EditSide",
    "RateContext",
    "RateSummary",
    "SyncController",
    "project",
]
