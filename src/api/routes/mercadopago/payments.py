"""Endpoints do checkout (criação de preferência e páginas de retorno).

Endpoints:
- POST /payment/create-preference: cria preferência no Mercado Pago
- GET /payment/public-key: chave pública para o checkout no frontend
- GET /payment/{success,failure,pending}: dados do retorno do checkout
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from api.validators.mercadopago import (
    PreferenceValidationError,
    build_preference_payload,
    validate_preference_request,
)
from app.bootstrap import get_payment_gateway
from app.protocols.payment_gateway import PaymentGatewayError
from config.settings import get_mercadopago_settings

logger = logging.getLogger(__name__)

router = APIRouter()

# Query params que o Mercado Pago anexa ao redirecionar para back_urls
RESULT_QUERY_FIELDS = (
    "collection_id",
    "collection_status",
    "payment_id",
    "status",
    "external_reference",
    "payment_type",
    "merchant_order_id",
    "preference_id",
    "site_id",
    "processing_mode",
    "merchant_account_id",
)


def _get_gateway():
    """Obtém cliente da API do Mercado Pago (lazy-loading)."""
    return get_payment_gateway()


@router.post("/create-preference", response_model=None)
async def create_preference(request: Request) -> JSONResponse:
    """Cria preferência de pagamento para o carrinho recebido."""
    try:
        try:
            data = json.loads(await request.body() or b"null")
        except (json.JSONDecodeError, UnicodeDecodeError):
            data = None

        try:
            preference_request = validate_preference_request(data)
        except PreferenceValidationError as exc:
            logger.info(
                "preference_request_invalid",
                extra={"channel": "mercadopago", "fields": sorted(exc.details)},
            )
            return JSONResponse(
                content={
                    "success": False,
                    "error": "invalid_request",
                    "details": exc.details,
                },
                status_code=422,
            )

        settings = get_mercadopago_settings()
        payload = build_preference_payload(preference_request, settings)

        try:
            preference = await _get_gateway().create_preference(payload)
        except PaymentGatewayError as exc:
            logger.warning(
                "preference_create_failed",
                extra={
                    "channel": "mercadopago",
                    "error_code": exc.error_code,
                    "status_code": exc.status_code,
                },
            )
            return JSONResponse(
                content={
                    "success": False,
                    "error": "preference_create_failed",
                    "details": str(exc),
                },
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        logger.info(
            "preference_created",
            extra={
                "channel": "mercadopago",
                "preference_id": preference.id,
                "external_reference": preference_request.external_reference,
                "items_count": len(preference_request.items),
            },
        )
        return JSONResponse(
            content={
                "success": True,
                "preference_id": preference.id,
                "init_point": preference.init_point,
                "sandbox_init_point": preference.sandbox_init_point,
                "public_key": settings.public_key,
            },
            status_code=status.HTTP_200_OK,
        )

    except Exception:
        logger.exception("preference_create_error", extra={"channel": "mercadopago"})
        return JSONResponse(
            content={
                "success": False,
                "error": "internal_error",
                "details": "preference_not_created",
            },
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


@router.get("/public-key")
async def public_key() -> dict[str, Any]:
    """Chave pública do Mercado Pago para o frontend."""
    return {"success": True, "public_key": get_mercadopago_settings().public_key}


def _result_payload(result: str, request: Request) -> dict[str, Any]:
    payment_data = {field: request.query_params.get(field) for field in RESULT_QUERY_FIELDS}
    logger.info(
        "checkout_returned",
        extra={
            "channel": "mercadopago",
            "result": result,
            "payment_id": payment_data["payment_id"],
            "external_reference": payment_data["external_reference"],
        },
    )
    return {"result": result, "payment_data": payment_data}


@router.get("/success")
async def payment_success(request: Request) -> dict[str, Any]:
    """Retorno do checkout com pagamento aprovado."""
    return _result_payload("success", request)


@router.get("/failure")
async def payment_failure(request: Request) -> dict[str, Any]:
    """Retorno do checkout com pagamento recusado."""
    return _result_payload("failure", request)


@router.get("/pending")
async def payment_pending(request: Request) -> dict[str, Any]:
    """Retorno do checkout com pagamento pendente."""
    return _result_payload("pending", request)
