"""Conector Mercado Pago - adapter de borda para a API de pagamentos.

Este módulo é o único ponto de IO com o Mercado Pago.
Responsabilidades:
- Webhook (assinatura x-signature, parsing do envelope)
- HTTP client para payments, merchant_orders e checkout/preferences
- Registros tipados e erros da API
"""

from .http_client import MercadoPagoHttpClient, create_mercadopago_http_client
from .mp_errors import MercadoPagoApiError, is_permanent_error, parse_mp_error
from .signature import (
    SignatureResult,
    WebhookSignatureVerifier,
    build_manifest,
    compute_signature,
    verify_webhook_signature,
)

__all__ = [
    "MercadoPagoApiError",
    "MercadoPagoHttpClient",
    "SignatureResult",
    "WebhookSignatureVerifier",
    "build_manifest",
    "compute_signature",
    "create_mercadopago_http_client",
    "is_permanent_error",
    "parse_mp_error",
    "verify_webhook_signature",
]
