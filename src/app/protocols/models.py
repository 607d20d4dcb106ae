"""Contratos canônicos do fluxo de pagamentos.

Envelope da notificação, resultado normalizado do despacho e os registros
tipados montados a partir das respostas da API do Mercado Pago. A camada
api/ reexporta estes tipos; a camada app/ depende apenas deles.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

TOPIC_PAYMENT = "payment"
TOPIC_MERCHANT_ORDER = "merchant_order"


@dataclass(frozen=True, slots=True)
class NotificationEnvelope:
    """Notificação recebida do Mercado Pago (uma por entrega de webhook).

    Atributos:
        topic: Categoria da notificação (`topic` ou `type` no payload)
        data_id: ID do recurso remoto notificado (`data.id`)
        action: Ação informada pelo processador (ex: payment.updated)
        live_mode: False para notificações de sandbox
    """

    topic: str
    data_id: str | None = None
    action: str | None = None
    live_mode: bool | None = None


@dataclass(frozen=True, slots=True)
class NormalizedOutcome:
    """Resultado do despacho de uma notificação.

    `retryable` indica falha transitória (timeout, 5xx): a rota responde
    erro de servidor para que o Mercado Pago reenvie a notificação.
    """

    success: bool
    topic: str
    resource_id: str | None = None
    status: str | None = None
    external_reference: str | None = None
    amount: float | None = None
    message: str | None = None
    error: str | None = None
    details: str | None = None
    retryable: bool = False

    def as_dict(self) -> dict[str, Any]:
        """Serializa omitindo campos vazios."""
        return {key: value for key, value in asdict(self).items() if value is not None}


class PaymentRecord(BaseModel):
    """Pagamento retornado por GET /v1/payments/{id}."""

    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)

    id: str = Field(..., min_length=1, description="ID do pagamento no Mercado Pago.")
    status: str = Field(..., min_length=1, description="approved, pending, rejected, ...")
    status_detail: str | None = Field(default=None, description="Detalhe do status.")
    external_reference: str | None = Field(
        default=None,
        description="ID do pedido na loja, informado na preferência.",
    )
    transaction_amount: float | None = Field(default=None, description="Valor cobrado.")
    currency_id: str | None = Field(default=None, description="Moeda (ex: ARS).")


class MerchantOrderRecord(BaseModel):
    """Merchant order retornada por GET /merchant_orders/{id}."""

    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)

    id: str = Field(..., min_length=1, description="ID da merchant order.")
    status: str = Field(..., min_length=1, description="opened, closed, expired.")
    external_reference: str | None = Field(default=None, description="ID do pedido na loja.")
    order_status: str | None = Field(
        default=None,
        description="Situação de pagamento agregada (paid, payment_required, ...).",
    )


class PreferenceRecord(BaseModel):
    """Preferência criada por POST /checkout/preferences."""

    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)

    id: str = Field(..., min_length=1, description="ID da preferência.")
    init_point: str = Field(..., min_length=1, description="URL do checkout em produção.")
    sandbox_init_point: str | None = Field(default=None, description="URL do checkout sandbox.")


__all__ = [
    "TOPIC_MERCHANT_ORDER",
    "TOPIC_PAYMENT",
    "MerchantOrderRecord",
    "NormalizedOutcome",
    "NotificationEnvelope",
    "PaymentRecord",
    "PreferenceRecord",
]
