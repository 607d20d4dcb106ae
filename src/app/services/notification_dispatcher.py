"""Despacho de notificações do Mercado Pago por tópico.

Cada notificação é processada de forma isolada:
- `payment`: busca o pagamento e repassa ao atualizador de pedidos
- `merchant_order`: busca a merchant order (somente leitura)
- demais tópicos: reconhecidos sem chamada remota

Falhas remotas viram NormalizedOutcome com `success=False`; o dispatcher
nunca refaz chamadas. Reentrega é responsabilidade do Mercado Pago.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from app.observability import get_correlation_id, record_latency
from app.protocols.models import TOPIC_MERCHANT_ORDER, TOPIC_PAYMENT, NormalizedOutcome
from app.protocols.order_store import OrderStateDecodeError
from app.protocols.payment_gateway import PaymentGatewayError
from utils.errors import InfrastructureError

if TYPE_CHECKING:
    from app.protocols.models import NotificationEnvelope
    from app.protocols.order_store import OrderStatusUpdaterProtocol
    from app.protocols.payment_gateway import PaymentGatewayProtocol

logger = logging.getLogger(__name__)

UNHANDLED_TOPIC_MESSAGE = "unhandled_topic"


class NotificationDispatcher:
    """Roteia o envelope para o handler do tópico.

    Args:
        gateway: Cliente da API do Mercado Pago
        order_updater: Colaborador que aplica o pagamento ao pedido local
    """

    def __init__(
        self,
        gateway: PaymentGatewayProtocol,
        order_updater: OrderStatusUpdaterProtocol,
    ) -> None:
        self._gateway = gateway
        self._order_updater = order_updater

    async def dispatch(self, envelope: NotificationEnvelope) -> NormalizedOutcome:
        """Processa uma notificação e retorna o resultado normalizado."""
        started_at = time.perf_counter()
        try:
            return await self._route(envelope)
        finally:
            record_latency(
                "notification_dispatcher",
                envelope.topic or "unknown",
                (time.perf_counter() - started_at) * 1000,
                get_correlation_id() or None,
            )

    async def _route(self, envelope: NotificationEnvelope) -> NormalizedOutcome:
        topic = envelope.topic
        if topic not in (TOPIC_PAYMENT, TOPIC_MERCHANT_ORDER):
            logger.info(
                "notification_topic_unhandled",
                extra={"component": "notification_dispatcher", "topic": topic},
            )
            return NormalizedOutcome(success=True, topic=topic, message=UNHANDLED_TOPIC_MESSAGE)

        if not envelope.data_id:
            logger.warning(
                "notification_missing_data_id",
                extra={"component": "notification_dispatcher", "topic": topic},
            )
            return NormalizedOutcome(
                success=False,
                topic=topic,
                error="missing_data_id",
                details="data.id é obrigatório para este tópico",
            )

        try:
            if topic == TOPIC_PAYMENT:
                return await self._handle_payment(envelope.data_id)
            return await self._handle_merchant_order(envelope.data_id)
        except PaymentGatewayError as exc:
            logger.warning(
                "notification_remote_failure",
                extra={
                    "component": "notification_dispatcher",
                    "topic": topic,
                    "resource_id": envelope.data_id,
                    "error_code": exc.error_code,
                    "status_code": exc.status_code,
                    "retryable": exc.retryable,
                },
            )
            return NormalizedOutcome(
                success=False,
                topic=topic,
                resource_id=envelope.data_id,
                error=exc.error_code,
                details=str(exc),
                retryable=exc.retryable,
            )
        except InfrastructureError as exc:
            logger.error(
                "notification_order_update_failed",
                extra={
                    "component": "notification_dispatcher",
                    "topic": topic,
                    "resource_id": envelope.data_id,
                    "error_type": type(exc).__name__,
                },
            )
            return NormalizedOutcome(
                success=False,
                topic=topic,
                resource_id=envelope.data_id,
                error="order_update_failed",
                details=str(exc),
                retryable=True,
            )
        except OrderStateDecodeError as exc:
            logger.error(
                "notification_order_state_corrupted",
                extra={
                    "component": "notification_dispatcher",
                    "topic": topic,
                    "resource_id": envelope.data_id,
                },
            )
            return NormalizedOutcome(
                success=False,
                topic=topic,
                resource_id=envelope.data_id,
                error="order_update_failed",
                details=str(exc),
                retryable=False,
            )

    async def _handle_payment(self, payment_id: str) -> NormalizedOutcome:
        payment = await self._gateway.get_payment(payment_id)
        await self._order_updater.update(payment)
        logger.info(
            "notification_payment_processed",
            extra={
                "component": "notification_dispatcher",
                "resource_id": payment.id,
                "payment_status": payment.status,
            },
        )
        return NormalizedOutcome(
            success=True,
            topic=TOPIC_PAYMENT,
            resource_id=payment.id,
            status=payment.status,
            external_reference=payment.external_reference,
            amount=payment.transaction_amount,
        )

    async def _handle_merchant_order(self, merchant_order_id: str) -> NormalizedOutcome:
        merchant_order = await self._gateway.get_merchant_order(merchant_order_id)
        logger.info(
            "notification_merchant_order_processed",
            extra={
                "component": "notification_dispatcher",
                "resource_id": merchant_order.id,
                "merchant_order_status": merchant_order.status,
            },
        )
        return NormalizedOutcome(
            success=True,
            topic=TOPIC_MERCHANT_ORDER,
            resource_id=merchant_order.id,
            status=merchant_order.status,
            external_reference=merchant_order.external_reference,
        )
