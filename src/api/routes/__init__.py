"""Rotas HTTP da API — adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (webhook, checkout, health)
- Validação inicial de request (assinatura, corpo, query params)
- Delegação para connectors/services
- Respostas HTTP apropriadas

Estrutura:
- routes/mercadopago/: webhook e checkout do Mercado Pago
- routes/health/: health checks e readiness

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
