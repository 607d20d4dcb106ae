"""Endpoint de webhook do Mercado Pago.

Endpoint:
- POST /webhooks/mercadopago: notificações de payment, merchant_order, ...

Fluxo:
1. Lê corpo bruto e monta o envelope (topic, data.id)
2. Valida assinatura x-signature (falha fechada, 401)
3. Despacha por tópico e responde conforme o resultado

Respostas:
- 200 {"status": "ok"}: processado (inclui tópicos sem handler)
- 401 {"error": "invalid signature"}: assinatura ausente ou inválida
- 400: JSON inválido ou falha permanente (ex: recurso inexistente)
- 500: falha transitória (timeout, 5xx) para o Mercado Pago reenviar
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from api.connectors.mercadopago.webhook.receive import (
    InvalidJsonError,
    InvalidSignatureError,
    parse_webhook_request,
)
from app.bootstrap import get_notification_dispatcher, get_signature_verifier
from app.observability import (
    correlation_id_from_headers,
    get_correlation_id,
    record_webhook_outcome,
    reset_correlation_id,
    set_correlation_id,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_verifier():
    """Obtém verificador de assinatura (lazy-loading)."""
    return get_signature_verifier()


def _get_dispatcher():
    """Obtém dispatcher de notificações (lazy-loading)."""
    return get_notification_dispatcher()


def _error_body(error: str | None, details: str | None) -> dict[str, object]:
    return {"success": False, "error": error, "details": details}


@router.post("", response_model=None)
async def receive_webhook(request: Request) -> JSONResponse:
    """Recebimento de notificações do Mercado Pago."""
    token = set_correlation_id(correlation_id_from_headers(request.headers))

    try:
        raw_body = await request.body()

        try:
            envelope, _signature_result = parse_webhook_request(
                raw_body=raw_body,
                headers=request.headers,
                query_params=request.query_params,
                verifier=_get_verifier(),
            )
        except InvalidSignatureError as exc:
            logger.warning(
                "webhook_signature_invalid",
                extra={
                    "channel": "mercadopago",
                    "correlation_id": get_correlation_id(),
                    "error": str(exc),
                },
            )
            record_webhook_outcome("unknown", "rejected", get_correlation_id())
            return JSONResponse(
                content={"error": "invalid signature"},
                status_code=status.HTTP_401_UNAUTHORIZED,
            )
        except InvalidJsonError as exc:
            logger.warning(
                "webhook_json_invalid",
                extra={
                    "channel": "mercadopago",
                    "correlation_id": get_correlation_id(),
                    "error": str(exc),
                },
            )
            return JSONResponse(
                content=_error_body("invalid_json", str(exc)),
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        logger.info(
            "webhook_received",
            extra={
                "channel": "mercadopago",
                "correlation_id": get_correlation_id(),
                "topic": envelope.topic,
                "action": envelope.action,
                "live_mode": envelope.live_mode,
                "payload_size": len(raw_body),
            },
        )

        try:
            outcome = await _get_dispatcher().dispatch(envelope)
        except Exception:
            logger.exception(
                "webhook_processing_failed",
                extra={"channel": "mercadopago", "correlation_id": get_correlation_id()},
            )
            record_webhook_outcome(envelope.topic, "error", get_correlation_id())
            return JSONResponse(
                content={"error": "internal_error"},
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        if outcome.success:
            result = "unhandled" if outcome.message else "processed"
            record_webhook_outcome(envelope.topic, result, get_correlation_id())
            return JSONResponse(content={"status": "ok"}, status_code=status.HTTP_200_OK)

        record_webhook_outcome(envelope.topic, "failed", get_correlation_id())
        status_code = (
            status.HTTP_500_INTERNAL_SERVER_ERROR
            if outcome.retryable
            else status.HTTP_400_BAD_REQUEST
        )
        return JSONResponse(
            content=_error_body(outcome.error, outcome.details),
            status_code=status_code,
        )

    finally:
        reset_correlation_id(token)
