"""Agregador de settings do Kommerce Pagos.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    OrderStoreBackend,
    OrderStoreSettings,
    get_base_settings,
    get_order_store_settings,
)

# Processor-specific settings
from config.settings.mercadopago import (
    MERCADOPAGO_API_BASE_URL,
    MercadoPagoEnvironment,
    MercadoPagoSettings,
    get_mercadopago_settings,
)

__all__ = [
    # Constants
    "MERCADOPAGO_API_BASE_URL",
    # Base
    "BaseSettings",
    "Environment",
    # Mercado Pago
    "MercadoPagoEnvironment",
    "MercadoPagoSettings",
    "OrderStoreBackend",
    "OrderStoreSettings",
    "get_base_settings",
    "get_mercadopago_settings",
    "get_order_store_settings",
]
