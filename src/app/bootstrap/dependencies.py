"""Factories de dependências — criação de implementações concretas.

Este módulo centraliza a criação de stores, clientes e serviços
baseados nas configurações de ambiente. As rotas recebem apenas os
protocolos; nada aqui lê segredos em tempo de requisição.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.mercadopago import (
    WebhookSignatureVerifier,
    create_mercadopago_http_client,
)
from app.bootstrap.clients import create_async_redis_client
from app.infra.stores import MemoryOrderStore, RedisOrderStore
from app.services.notification_dispatcher import NotificationDispatcher
from app.services.order_status import OrderStatusUpdater
from config.settings import (
    get_base_settings,
    get_mercadopago_settings,
    get_order_store_settings,
)

if TYPE_CHECKING:
    from app.protocols.order_store import OrderStatusUpdaterProtocol, OrderStoreProtocol
    from app.protocols.payment_gateway import PaymentGatewayProtocol

logger = logging.getLogger(__name__)


def create_signature_verifier() -> WebhookSignatureVerifier:
    """Cria verificador de assinatura com o secret das settings."""
    verifier = WebhookSignatureVerifier(get_mercadopago_settings().webhook_secret)
    if not verifier.configured:
        logger.warning(
            "webhook_secret_missing",
            extra={"component": "bootstrap", "effect": "all_webhooks_rejected"},
        )
    return verifier


def create_payment_gateway() -> PaymentGatewayProtocol:
    """Cria cliente da API do Mercado Pago.

    Raises:
        ConfigurationError: Se MERCADOPAGO_ACCESS_TOKEN não configurado
    """
    return create_mercadopago_http_client(get_mercadopago_settings())


def create_order_store() -> OrderStoreProtocol:
    """Cria store de pedidos baseado na configuração.

    Lê ORDER_STORE_BACKEND:
    - "memory": MemoryOrderStore (dev only)
    - "redis": RedisOrderStore (staging/production)
    """
    settings = get_order_store_settings()

    if settings.backend == "redis":
        store: OrderStoreProtocol = RedisOrderStore(
            create_async_redis_client(),
            ttl_seconds=settings.ttl_seconds,
        )
        logger.info("order_store_created", extra={"backend": "redis"})
        return store

    if not get_base_settings().is_development:
        logger.warning(
            "memory_store_in_non_dev",
            extra={"backend": "memory", "environment": get_base_settings().environment},
        )
    store = MemoryOrderStore(ttl_seconds=settings.ttl_seconds)
    logger.info("order_store_created", extra={"backend": "memory"})
    return store


def create_order_status_updater(
    store: OrderStoreProtocol | None = None,
) -> OrderStatusUpdaterProtocol:
    """Cria atualizador de status de pedidos."""
    return OrderStatusUpdater(store or create_order_store())


def create_notification_dispatcher(
    gateway: PaymentGatewayProtocol | None = None,
    order_updater: OrderStatusUpdaterProtocol | None = None,
) -> NotificationDispatcher:
    """Cria dispatcher de notificações com dependências injetadas."""
    return NotificationDispatcher(
        gateway or create_payment_gateway(),
        order_updater or create_order_status_updater(),
    )
