"""Aplicação de pagamentos ao status local do pedido.

O pedido é identificado pela `external_reference` da preferência. Entregas
do Mercado Pago podem chegar duplicadas e fora de ordem, então a transição
é monotônica por rank:

    pending < authorized < failed = paid < refunded

Status igual é no-op; `failed` pode ser substituído por `paid` (novo
pagamento aprovado para o mesmo pedido), nunca o contrário.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from app.protocols.order_store import OrderState

if TYPE_CHECKING:
    from app.protocols.models import PaymentRecord
    from app.protocols.order_store import OrderStoreProtocol

logger = logging.getLogger(__name__)

ORDER_PENDING = "pending"
ORDER_AUTHORIZED = "authorized"
ORDER_PAID = "paid"
ORDER_FAILED = "failed"
ORDER_REFUNDED = "refunded"

PAYMENT_TO_ORDER_STATUS: dict[str, str] = {
    "approved": ORDER_PAID,
    "authorized": ORDER_AUTHORIZED,
    "pending": ORDER_PENDING,
    "in_process": ORDER_PENDING,
    "in_mediation": ORDER_PENDING,
    "rejected": ORDER_FAILED,
    "cancelled": ORDER_FAILED,
    "refunded": ORDER_REFUNDED,
    "charged_back": ORDER_REFUNDED,
}

ORDER_STATUS_RANK: dict[str, int] = {
    ORDER_PENDING: 0,
    ORDER_AUTHORIZED: 1,
    ORDER_FAILED: 2,
    ORDER_PAID: 2,
    ORDER_REFUNDED: 3,
}


def map_payment_status(payment_status: str) -> str | None:
    """Converte status do Mercado Pago em status local (None se desconhecido)."""
    return PAYMENT_TO_ORDER_STATUS.get(payment_status.strip().lower())


def should_replace(current: OrderState | None, candidate: OrderState) -> bool:
    """Política de transição monotônica."""
    if current is None:
        return True
    if current.status == candidate.status:
        return False
    current_rank = ORDER_STATUS_RANK.get(current.status, -1)
    candidate_rank = ORDER_STATUS_RANK[candidate.status]
    if candidate_rank > current_rank:
        return True
    return current.status == ORDER_FAILED and candidate.status == ORDER_PAID


class OrderStatusUpdater:
    """Implementação de OrderStatusUpdaterProtocol sobre um OrderStore."""

    def __init__(self, store: OrderStoreProtocol) -> None:
        self._store = store

    async def update(self, payment: PaymentRecord) -> None:
        reference = (payment.external_reference or "").strip()
        if not reference:
            logger.info(
                "order_update_skipped",
                extra={
                    "component": "order_status",
                    "reason": "missing_external_reference",
                    "payment_id": payment.id,
                },
            )
            return

        order_status = map_payment_status(payment.status)
        if order_status is None:
            logger.warning(
                "order_update_skipped",
                extra={
                    "component": "order_status",
                    "reason": "unknown_payment_status",
                    "payment_id": payment.id,
                    "payment_status": payment.status,
                },
            )
            return

        candidate = OrderState(
            reference=reference,
            status=order_status,
            payment_id=payment.id,
            payment_status=payment.status,
            updated_at=time.time(),
        )
        applied = await self._store.transition(candidate, should_replace)
        logger.info(
            "order_status_applied" if applied else "order_status_kept",
            extra={
                "component": "order_status",
                "order_reference": reference,
                "order_status": order_status,
                "payment_id": payment.id,
            },
        )
