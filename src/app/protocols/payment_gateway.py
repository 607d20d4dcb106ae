"""Protocolo do gateway de pagamentos usado pelo app.

Evita dependência direta da camada api.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.protocols.models import MerchantOrderRecord, PaymentRecord, PreferenceRecord


class PaymentGatewayError(Exception):
    """Falha ao consultar/criar recurso no processador de pagamentos.

    Attributes:
        error_code: Código curto e estável (timeout, not_found, http_error, ...)
        status_code: Status HTTP da resposta remota, quando houver
        retryable: True para falhas transitórias (timeout, conexão, 429, 5xx)
    """

    def __init__(
        self,
        message: str,
        *,
        error_code: str = "gateway_error",
        status_code: int | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.status_code = status_code
        self.retryable = retryable


class PaymentGatewayProtocol(Protocol):
    """Contrato mínimo para o cliente da API do Mercado Pago."""

    async def get_payment(self, payment_id: str) -> PaymentRecord: ...

    async def get_merchant_order(self, merchant_order_id: str) -> MerchantOrderRecord: ...

    async def create_preference(self, payload: dict[str, Any]) -> PreferenceRecord: ...
