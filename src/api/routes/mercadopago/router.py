"""Routers do Mercado Pago — webhook e checkout."""

from __future__ import annotations

from api.routes.mercadopago.payments import router as payments_router
from api.routes.mercadopago.webhook import router as webhook_router

__all__ = ["payments_router", "webhook_router"]
