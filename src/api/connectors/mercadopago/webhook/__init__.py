"""Webhook Mercado Pago: assinatura e parsing seguro."""

from ..signature import SignatureResult, WebhookSignatureVerifier
from .receive import (
    InvalidJsonError,
    InvalidSignatureError,
    WebhookRequestError,
    parse_notification,
    parse_webhook_request,
)

__all__ = [
    "InvalidJsonError",
    "InvalidSignatureError",
    "SignatureResult",
    "WebhookRequestError",
    "WebhookSignatureVerifier",
    "parse_notification",
    "parse_webhook_request",
]
