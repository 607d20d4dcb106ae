"""Agregador de settings base.

Re-exporta todas as settings base para uso externo.
"""

from __future__ import annotations

from config.settings.base.core import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.base.order_store import (
    OrderStoreBackend,
    OrderStoreSettings,
    get_order_store_settings,
)

__all__ = [
    # Core
    "BaseSettings",
    # Types
    "Environment",
    "OrderStoreBackend",
    # Order store
    "OrderStoreSettings",
    "get_base_settings",
    "get_order_store_settings",
]
