"""Validação de assinatura HMAC-SHA256 dos webhooks do Mercado Pago.

O Mercado Pago assina cada notificação com o secret do webhook:

    x-signature: ts=1704908010,v1=618c85345248dd820d5fd456117c2ab2ef8eda45a0282ff693eac24131a5e839
    x-request-id: bb56a2f1-6aae-46ac-982e-9dcd3581d08e

O conteúdo assinado (manifest) é montado a partir do `data.id` notificado,
do `x-request-id` e do `ts` do header, exatamente nesta ordem:

    id:{data.id};request-id:{x-request-id};ts:{ts};

Regras:
- Sem header ou sem secret: falha fechada (nunca verifica parcialmente)
- Header sem `ts` ou `v1`: falha fechada
- Comparação sempre em tempo constante (hmac.compare_digest)
- Nunca levanta exceção; nunca loga o secret
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "x-signature"
REQUEST_ID_HEADER = "x-request-id"


@dataclass(frozen=True, slots=True)
class WebhookSignatureHeader:
    """Header x-signature parseado."""

    ts: str
    v1: str


@dataclass(frozen=True, slots=True)
class SignatureResult:
    """Resultado da verificação.

    Atributos:
        valid: True se a assinatura confere
        error: Código do motivo da rejeição (None quando válida)
    """

    valid: bool
    error: str | None = None


def parse_signature_header(header_value: str | None) -> WebhookSignatureHeader | None:
    """Parseia `key1=value1,key2=value2` exigindo `ts` e `v1` não vazios.

    Segmentos sem `=` são ignorados; o valor é tudo após o primeiro `=`.
    """
    if not header_value:
        return None

    parts: dict[str, str] = {}
    for segment in header_value.split(","):
        key, sep, value = segment.partition("=")
        if not sep:
            continue
        parts[key.strip()] = value.strip()

    ts = parts.get("ts", "")
    v1 = parts.get("v1", "")
    if not ts or not v1:
        return None
    return WebhookSignatureHeader(ts=ts, v1=v1)


def build_manifest(data_id: str | None, request_id: str | None, ts: str) -> str:
    """Monta o manifest assinado pelo Mercado Pago.

    Campos ausentes viram string vazia; nenhum campo é omitido.
    """
    return f"id:{data_id or ''};request-id:{request_id or ''};ts:{ts};"


def compute_signature(manifest: str, secret: str) -> str:
    """HMAC-SHA256 do manifest com o secret, em hex."""
    return hmac.new(
        secret.encode("utf-8"),
        manifest.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def verify_webhook_signature(
    header_value: str | None,
    request_id: str | None,
    data_id: str | None,
    secret: str | None,
) -> SignatureResult:
    """Verifica a assinatura de uma notificação.

    Args:
        header_value: Valor do header x-signature
        request_id: Valor do header x-request-id
        data_id: `data.id` da notificação
        secret: Secret do webhook configurado no painel do Mercado Pago

    Returns:
        SignatureResult (nunca levanta exceção)
    """
    if not secret:
        logger.warning("webhook_signature_rejected", extra={"reason": "missing_secret"})
        return SignatureResult(valid=False, error="missing_secret")

    if not header_value:
        logger.warning("webhook_signature_rejected", extra={"reason": "missing_signature"})
        return SignatureResult(valid=False, error="missing_signature")

    parsed = parse_signature_header(header_value)
    if parsed is None:
        logger.warning(
            "webhook_signature_rejected",
            extra={"reason": "malformed_signature", "signature_header": header_value},
        )
        return SignatureResult(valid=False, error="malformed_signature")

    manifest = build_manifest(data_id, request_id, parsed.ts)
    expected = compute_signature(manifest, secret)

    if not hmac.compare_digest(expected.encode("utf-8"), parsed.v1.encode("utf-8")):
        logger.warning(
            "webhook_signature_rejected",
            extra={
                "reason": "signature_mismatch",
                "expected_signature": expected,
                "received_signature": parsed.v1,
                "manifest": manifest,
            },
        )
        return SignatureResult(valid=False, error="signature_mismatch")

    return SignatureResult(valid=True)


class WebhookSignatureVerifier:
    """Verificador com o secret injetado no construtor.

    Args:
        secret: Secret do webhook (None/vazio = rejeita tudo)
    """

    def __init__(self, secret: str | None) -> None:
        self._secret = secret or None

    @property
    def configured(self) -> bool:
        """True se há secret configurado."""
        return self._secret is not None

    def check(
        self,
        header_value: str | None,
        request_id: str | None,
        data_id: str | None,
    ) -> SignatureResult:
        """Verifica e retorna o resultado estruturado."""
        return verify_webhook_signature(header_value, request_id, data_id, self._secret)

    def verify(
        self,
        header_value: str | None,
        request_id: str | None,
        data_id: str | None,
    ) -> bool:
        """Retorna True se a assinatura confere."""
        return self.check(header_value, request_id, data_id).valid
