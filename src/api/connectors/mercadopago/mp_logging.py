"""Helpers de logging para a API do Mercado Pago (sem token nem PII)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .mp_errors import MercadoPagoApiError

logger = logging.getLogger(__name__)


def log_mp_error(
    error: MercadoPagoApiError,
    method: str,
    path: str,
) -> None:
    """Loga erro da API sem expor dados sensíveis."""
    logger.warning(
        "mercadopago_api_error",
        extra={
            "method": method,
            "path": path,
            "error_code": error.error_code,
            "status_code": error.status_code,
            "retryable": error.retryable,
        },
    )


def log_success(
    method: str,
    path: str,
    status_code: int,
) -> None:
    """Loga sucesso sem expor dados sensíveis."""
    logger.debug(
        "mercadopago_api_ok",
        extra={
            "method": method,
            "path": path,
            "status_code": status_code,
        },
    )
