"""Agregador de rotas — registra todos os routers.

Este módulo é responsável por criar o router principal da API
e incluir os sub-routers de health, webhook e checkout.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.mercadopago.router import payments_router, webhook_router
from config.settings import get_mercadopago_settings


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health checks (sem prefixo para /health e /ready na raiz)
    api_router.include_router(health_router, tags=["health"])

    # Webhook do Mercado Pago (caminho configurável no painel)
    api_router.include_router(
        webhook_router,
        prefix=get_mercadopago_settings().webhook_endpoint.rstrip("/"),
        tags=["mercadopago"],
    )

    # Checkout
    api_router.include_router(payments_router, prefix="/payment", tags=["payment"])

    return api_router
