"""Erros e helpers de parsing para a API do Mercado Pago.

Corpo de erro típico:

    {"message": "Payment not found", "error": "not_found", "status": 404,
     "cause": [{"code": 2000, "description": "Payment not found"}]}
"""

from __future__ import annotations

from typing import Any

from app.protocols.payment_gateway import PaymentGatewayError

# Erros permanentes: reenviar a mesma requisição não muda o resultado
PERMANENT_STATUS_CODES = frozenset({400, 401, 403, 404, 405, 409, 422})


class MercadoPagoApiError(PaymentGatewayError):
    """Erro retornado (ou provocado) pela API do Mercado Pago."""


def is_permanent_error(status_code: int) -> bool:
    """Classifica status HTTP como permanente ou transitório.

    Erros permanentes: 4xx (exceto 408 e 429)
    Erros transitórios: 408, 429 (rate limit), 5xx
    """
    if status_code in PERMANENT_STATUS_CODES:
        return True
    return 400 <= status_code < 500 and status_code not in (408, 429)


def _error_code_for(status_code: int, body_error: str | None) -> str:
    if status_code == 404:
        return "not_found"
    if status_code in (401, 403):
        return "unauthorized"
    return body_error or "http_error"


def parse_mp_error(status_code: int, response_data: Any) -> MercadoPagoApiError:
    """Monta MercadoPagoApiError a partir de uma resposta não-2xx.

    Args:
        status_code: Status HTTP da resposta
        response_data: JSON decodificado (ou None se corpo inválido)

    Returns:
        MercadoPagoApiError classificado
    """
    body = response_data if isinstance(response_data, dict) else {}
    message = str(body.get("message") or f"HTTP {status_code}")
    body_error = body.get("error") if isinstance(body.get("error"), str) else None

    causes = body.get("cause")
    if isinstance(causes, list) and causes:
        first = causes[0]
        if isinstance(first, dict) and first.get("description"):
            message = f"{message}: {first['description']}"

    return MercadoPagoApiError(
        message,
        error_code=_error_code_for(status_code, body_error),
        status_code=status_code,
        retryable=not is_permanent_error(status_code),
    )
