"""Protocolos e contratos do core da aplicação."""

from .models import (
    TOPIC_MERCHANT_ORDER,
    TOPIC_PAYMENT,
    MerchantOrderRecord,
    NormalizedOutcome,
    NotificationEnvelope,
    PaymentRecord,
    PreferenceRecord,
)
from .order_store import (
    OrderState,
    OrderStateDecodeError,
    OrderStatusUpdaterProtocol,
    OrderStoreProtocol,
)
from .payment_gateway import PaymentGatewayError, PaymentGatewayProtocol

__all__ = [
    "TOPIC_MERCHANT_ORDER",
    "TOPIC_PAYMENT",
    "MerchantOrderRecord",
    "NormalizedOutcome",
    "NotificationEnvelope",
    "OrderState",
    "OrderStateDecodeError",
    "OrderStatusUpdaterProtocol",
    "OrderStoreProtocol",
    "PaymentGatewayError",
    "PaymentGatewayProtocol",
    "PaymentRecord",
    "PreferenceRecord",
]
