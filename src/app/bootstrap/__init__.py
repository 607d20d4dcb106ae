"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_notification_dispatcher

    # Na inicialização do serviço
    initialize_app()

    dispatcher = get_notification_dispatcher()
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_mercadopago_settings,
    get_order_store_settings,
)

# Nome do serviço para logs e métricas
SERVICE_NAME = "kommerce_pagos"

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação com todas as configurações necessárias.

    Deve ser chamada uma vez no início do serviço.
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def initialize_test_app() -> None:
    """Inicializa a aplicação para testes (logging em DEBUG)."""
    configure_logging(
        level="DEBUG",
        service_name=f"{SERVICE_NAME}_test",
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido
    (ex: sem access token ou sem secret do webhook).
    Em `development` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    environment = base.environment
    strict_mode = environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())

    mp_errors = get_mercadopago_settings().validate()
    errors.extend(f"mercadopago: {error}" for error in mp_errors)

    store_errors = get_order_store_settings().validate(base)
    errors.extend(f"order_store: {error}" for error in store_errors)

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


# ──────────────────────────────────────────────────────────────────────────────
# Getters (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_signature_verifier():
    """Obtém verificador de assinatura do webhook (singleton)."""
    from app.bootstrap.dependencies import create_signature_verifier
    return create_signature_verifier()


@lru_cache(maxsize=1)
def get_payment_gateway():
    """Obtém cliente da API do Mercado Pago (singleton)."""
    from app.bootstrap.dependencies import create_payment_gateway
    return create_payment_gateway()


@lru_cache(maxsize=1)
def get_order_store():
    """Obtém store de pedidos (singleton)."""
    from app.bootstrap.dependencies import create_order_store
    return create_order_store()


@lru_cache(maxsize=1)
def get_notification_dispatcher():
    """Obtém dispatcher de notificações (singleton)."""
    from app.bootstrap.dependencies import (
        create_notification_dispatcher,
        create_order_status_updater,
    )
    return create_notification_dispatcher(
        gateway=get_payment_gateway(),
        order_updater=create_order_status_updater(get_order_store()),
    )
