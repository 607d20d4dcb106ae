"""Correlation id por requisição.

Nos webhooks do Mercado Pago o `x-request-id` enviado pelo processador é o
próprio correlation id: o mesmo valor entra no manifest da assinatura e nos
logs, permitindo cruzar uma entrega com o painel de notificações.

Usa ContextVar para ser async-safe.

Uso:
    token = set_correlation_id(correlation_id_from_headers(request.headers))
    try:
        ...
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

# Headers aceitos, em ordem de precedência
CORRELATION_HEADERS = ("x-request-id", "x-correlation-id")

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (ou string vazia)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None/vazio, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = correlation_id or generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    """Gera um novo correlation_id (UUID v4)."""
    return str(uuid.uuid4())


def correlation_id_from_headers(headers: Mapping[str, str]) -> str | None:
    """Extrai o correlation id dos headers da requisição, se houver."""
    for name in CORRELATION_HEADERS:
        value = headers.get(name)
        if value and value.strip():
            return value.strip()
    return None
