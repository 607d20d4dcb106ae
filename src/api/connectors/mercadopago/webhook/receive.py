"""Parse e validação inicial do webhook (sem PII)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from app.protocols.models import NotificationEnvelope

from ..signature import REQUEST_ID_HEADER, SIGNATURE_HEADER, SignatureResult

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ..signature import WebhookSignatureVerifier


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""


class InvalidSignatureError(WebhookRequestError):
    """Assinatura inválida do webhook."""


class InvalidJsonError(WebhookRequestError):
    """JSON inválido no payload do webhook."""


def _normalize_id(value: Any) -> str | None:
    # bool é subclasse de int e nunca é um ID válido
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, str)):
        text = str(value).strip()
        return text or None
    return None


def _first_text(*values: Any) -> str | None:
    for value in values:
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def parse_notification(
    payload: Mapping[str, Any],
    query_params: Mapping[str, str] | None = None,
) -> NotificationEnvelope:
    """Monta o envelope a partir do corpo e da query string.

    O Mercado Pago envia `type` nas notificações webhook e `topic` nas IPN;
    ambos também podem chegar na query (`?type=payment&data.id=123`).
    Valores do corpo têm precedência.
    """
    query = query_params or {}
    data = payload.get("data")
    body_id = data.get("id") if isinstance(data, dict) else None

    topic = _first_text(
        payload.get("topic"),
        payload.get("type"),
        query.get("topic"),
        query.get("type"),
    )
    data_id = _normalize_id(body_id) or _normalize_id(query.get("data.id")) or _normalize_id(
        query.get("id")
    )
    live_mode = payload.get("live_mode")

    return NotificationEnvelope(
        topic=topic or "",
        data_id=data_id,
        action=_first_text(payload.get("action")),
        live_mode=live_mode if isinstance(live_mode, bool) else None,
    )


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    query_params: Mapping[str, str] | None,
    verifier: WebhookSignatureVerifier,
) -> tuple[NotificationEnvelope, SignatureResult]:
    """Parseia o JSON e valida a assinatura do webhook.

    O `data.id` assinado faz parte do corpo, então o parse vem antes da
    verificação; nenhum efeito colateral acontece antes dela.

    Args:
        raw_body: Corpo bruto do request
        headers: Headers recebidos
        query_params: Query string do request
        verifier: Verificador com o secret do webhook

    Raises:
        InvalidJsonError: Se o JSON estiver inválido ou não for objeto
        InvalidSignatureError: Se assinatura for inválida

    Returns:
        (NotificationEnvelope, SignatureResult)
    """
    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    envelope = parse_notification(payload, query_params)

    signature_result = verifier.check(
        headers.get(SIGNATURE_HEADER),
        headers.get(REQUEST_ID_HEADER),
        envelope.data_id,
    )
    if not signature_result.valid:
        raise InvalidSignatureError(signature_result.error or "invalid_signature")

    return envelope, signature_result
