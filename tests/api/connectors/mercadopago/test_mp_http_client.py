"""Testes do cliente HTTP do Mercado Pago com httpx.MockTransport."""

from __future__ import annotations

import json
import logging

import httpx
import pytest

from api.connectors.mercadopago.http_base import HttpClientConfig
from api.connectors.mercadopago.http_client import (
    MercadoPagoHttpClient,
    create_mercadopago_http_client,
)
from api.connectors.mercadopago.mp_errors import MercadoPagoApiError
from config.settings import MercadoPagoSettings
from utils.errors import ConfigurationError

TOKEN = "APP_USR-123"
BASE_URL = "https://api.mercadopago.test"


def _client(handler) -> MercadoPagoHttpClient:
    return MercadoPagoHttpClient(
        TOKEN,
        config=HttpClientConfig(base_url=BASE_URL, timeout_seconds=1.0),
        transport=httpx.MockTransport(handler),
    )


def test_empty_token_is_configuration_error() -> None:
    with pytest.raises(ValueError):
        MercadoPagoHttpClient("  ")


def test_factory_requires_access_token() -> None:
    with pytest.raises(ConfigurationError):
        create_mercadopago_http_client(MercadoPagoSettings(access_token=""))


def test_factory_applies_settings() -> None:
    client = create_mercadopago_http_client(
        MercadoPagoSettings(access_token=TOKEN, request_timeout_seconds=3.5, max_retries=0)
    )

    assert isinstance(client, MercadoPagoHttpClient)
    assert client._config.timeout_seconds == 3.5
    assert client._config.base_url == "https://api.mercadopago.com"


@pytest.mark.asyncio
async def test_get_payment_sends_bearer_and_parses_record() -> None:
    seen: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["auth"] = request.headers["authorization"]
        return httpx.Response(
            200,
            json={
                "id": 123,
                "status": "approved",
                "status_detail": "accredited",
                "external_reference": "order-1",
                "transaction_amount": 150.5,
                "payer": {"email": "buyer@example.com"},
            },
        )

    payment = await _client(handler).get_payment("123")

    assert seen == {"path": "/v1/payments/123", "auth": f"Bearer {TOKEN}"}
    assert payment.id == "123"
    assert payment.status == "approved"
    assert payment.external_reference == "order-1"
    assert payment.transaction_amount == 150.5


@pytest.mark.asyncio
async def test_get_payment_escapes_resource_id() -> None:
    seen: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["raw_path"] = request.url.raw_path.decode("ascii")
        return httpx.Response(200, json={"id": "1", "status": "pending"})

    await _client(handler).get_payment("../v1/users")

    assert seen["raw_path"] == "/v1/payments/..%2Fv1%2Fusers"


@pytest.mark.asyncio
async def test_get_merchant_order() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/merchant_orders/55"
        return httpx.Response(
            200,
            json={"id": 55, "status": "closed", "external_reference": "order-9"},
        )

    order = await _client(handler).get_merchant_order("55")

    assert order.id == "55"
    assert order.status == "closed"
    assert order.external_reference == "order-9"


@pytest.mark.asyncio
async def test_create_preference_posts_payload() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["body"] = json.loads(request.content)
        seen["idempotency"] = request.headers.get("x-idempotency-key")
        return httpx.Response(
            201,
            json={"id": "pref-1", "init_point": "https://mp/init", "sandbox_init_point": "https://sb"},
        )

    preference = await _client(handler).create_preference({"items": []})

    assert seen["method"] == "POST"
    assert seen["body"] == {"items": []}
    assert seen["idempotency"]
    assert preference.id == "pref-1"
    assert preference.init_point == "https://mp/init"


@pytest.mark.asyncio
async def test_not_found_is_permanent_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            404,
            json={
                "message": "Payment not found",
                "error": "not_found",
                "status": 404,
                "cause": [{"code": 2000, "description": "Payment not found"}],
            },
        )

    with pytest.raises(MercadoPagoApiError) as exc_info:
        await _client(handler).get_payment("1")

    assert exc_info.value.error_code == "not_found"
    assert exc_info.value.status_code == 404
    assert exc_info.value.retryable is False
    assert "Payment not found" in str(exc_info.value)


@pytest.mark.asyncio
async def test_server_error_is_retryable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="bad gateway")

    with pytest.raises(MercadoPagoApiError) as exc_info:
        await _client(handler).get_payment("1")

    assert exc_info.value.retryable is True
    assert exc_info.value.status_code == 502
    assert exc_info.value.error_code == "server_error"


@pytest.mark.asyncio
async def test_timeout_is_retryable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(MercadoPagoApiError) as exc_info:
        await _client(handler).get_payment("1")

    assert exc_info.value.error_code == "timeout"
    assert exc_info.value.retryable is True


@pytest.mark.asyncio
async def test_connection_error_is_retryable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(MercadoPagoApiError) as exc_info:
        await _client(handler).get_merchant_order("1")

    assert exc_info.value.error_code == "connection_error"
    assert exc_info.value.retryable is True


@pytest.mark.asyncio
async def test_missing_required_field_is_rejected() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"id": "1"})

    with pytest.raises(MercadoPagoApiError) as exc_info:
        await _client(handler).get_payment("1")

    assert exc_info.value.error_code == "invalid_response"
    assert "status" in str(exc_info.value)


@pytest.mark.asyncio
async def test_non_json_success_body_is_rejected() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>")

    with pytest.raises(MercadoPagoApiError) as exc_info:
        await _client(handler).get_payment("1")

    assert exc_info.value.error_code == "invalid_response"


@pytest.mark.asyncio
async def test_logs_never_contain_token(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"message": "invalid token", "error": "unauthorized"})

    with pytest.raises(MercadoPagoApiError) as exc_info:
        await _client(handler).get_payment("1")

    assert exc_info.value.error_code == "unauthorized"
    assert TOKEN not in caplog.text
    assert all(
        TOKEN not in str(value) for record in caplog.records for value in record.__dict__.values()
    )
