"""Testes do dispatcher de notificações do Mercado Pago."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.protocols.models import (
    MerchantOrderRecord,
    NotificationEnvelope,
    PaymentRecord,
)
from app.protocols.order_store import OrderStateDecodeError
from app.protocols.payment_gateway import PaymentGatewayError
from app.services.notification_dispatcher import NotificationDispatcher
from utils.errors import RedisConnectionError

PAYMENT = PaymentRecord(
    id="123",
    status="approved",
    external_reference="order-1",
    transaction_amount=99.9,
)


def _dispatcher(gateway: MagicMock, updater: MagicMock | None = None):
    updater = updater or MagicMock(update=AsyncMock())
    return NotificationDispatcher(gateway, updater), gateway, updater


@pytest.mark.asyncio
async def test_payment_fetches_and_updates_order() -> None:
    gateway = MagicMock(get_payment=AsyncMock(return_value=PAYMENT))
    dispatcher, _, updater = _dispatcher(gateway)

    outcome = await dispatcher.dispatch(NotificationEnvelope(topic="payment", data_id="123"))

    gateway.get_payment.assert_awaited_once_with("123")
    updater.update.assert_awaited_once_with(PAYMENT)
    assert outcome.success is True
    assert outcome.resource_id == "123"
    assert outcome.status == "approved"
    assert outcome.external_reference == "order-1"
    assert outcome.amount == 99.9


@pytest.mark.asyncio
async def test_merchant_order_is_fetched_without_update() -> None:
    gateway = MagicMock(
        get_merchant_order=AsyncMock(
            return_value=MerchantOrderRecord(id="55", status="closed", external_reference="o-2")
        )
    )
    dispatcher, _, updater = _dispatcher(gateway)

    outcome = await dispatcher.dispatch(NotificationEnvelope(topic="merchant_order", data_id="55"))

    gateway.get_merchant_order.assert_awaited_once_with("55")
    updater.update.assert_not_awaited()
    assert outcome.success is True
    assert outcome.status == "closed"
    assert outcome.external_reference == "o-2"


@pytest.mark.asyncio
async def test_unknown_topic_is_success_without_remote_call() -> None:
    gateway = MagicMock(get_payment=AsyncMock(), get_merchant_order=AsyncMock())
    dispatcher, _, updater = _dispatcher(gateway)

    outcome = await dispatcher.dispatch(NotificationEnvelope(topic="shipment", data_id="x"))

    assert outcome.success is True
    assert outcome.message == "unhandled_topic"
    gateway.get_payment.assert_not_awaited()
    gateway.get_merchant_order.assert_not_awaited()
    updater.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_missing_data_id_is_local_failure() -> None:
    gateway = MagicMock(get_payment=AsyncMock())
    dispatcher, _, _ = _dispatcher(gateway)

    outcome = await dispatcher.dispatch(NotificationEnvelope(topic="payment", data_id=None))

    assert outcome.success is False
    assert outcome.error == "missing_data_id"
    assert outcome.retryable is False
    gateway.get_payment.assert_not_awaited()


@pytest.mark.asyncio
async def test_remote_failure_becomes_outcome() -> None:
    gateway = MagicMock(
        get_payment=AsyncMock(
            side_effect=PaymentGatewayError(
                "Payment not found", error_code="not_found", status_code=404
            )
        )
    )
    dispatcher, _, updater = _dispatcher(gateway)

    outcome = await dispatcher.dispatch(NotificationEnvelope(topic="payment", data_id="1"))

    assert outcome.success is False
    assert outcome.error == "not_found"
    assert outcome.details == "Payment not found"
    assert outcome.retryable is False
    updater.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_remote_timeout_is_retryable_and_not_retried() -> None:
    gateway = MagicMock(
        get_payment=AsyncMock(
            side_effect=PaymentGatewayError("http_timeout", error_code="timeout", retryable=True)
        )
    )
    dispatcher, _, _ = _dispatcher(gateway)

    outcome = await dispatcher.dispatch(NotificationEnvelope(topic="payment", data_id="1"))

    assert outcome.success is False
    assert outcome.retryable is True
    assert gateway.get_payment.await_count == 1


@pytest.mark.asyncio
async def test_order_store_failure_is_retryable() -> None:
    gateway = MagicMock(get_payment=AsyncMock(return_value=PAYMENT))
    updater = MagicMock(update=AsyncMock(side_effect=RedisConnectionError("down")))
    dispatcher, _, _ = _dispatcher(gateway, updater)

    outcome = await dispatcher.dispatch(NotificationEnvelope(topic="payment", data_id="123"))

    assert outcome.success is False
    assert outcome.error == "order_update_failed"
    assert outcome.retryable is True


@pytest.mark.asyncio
async def test_corrupted_order_state_is_permanent_failure() -> None:
    gateway = MagicMock(get_payment=AsyncMock(return_value=PAYMENT))
    updater = MagicMock(update=AsyncMock(side_effect=OrderStateDecodeError("bad state")))
    dispatcher, _, _ = _dispatcher(gateway, updater)

    outcome = await dispatcher.dispatch(NotificationEnvelope(topic="payment", data_id="123"))

    assert outcome.success is False
    assert outcome.error == "order_update_failed"
    assert outcome.retryable is False


@pytest.mark.asyncio
async def test_duplicate_delivery_yields_two_successes() -> None:
    gateway = MagicMock(get_payment=AsyncMock(return_value=PAYMENT))
    dispatcher, _, updater = _dispatcher(gateway)
    envelope = NotificationEnvelope(topic="payment", data_id="123")

    first = await dispatcher.dispatch(envelope)
    second = await dispatcher.dispatch(envelope)

    assert first.success is True
    assert second.success is True
    assert updater.update.await_count == 2


def test_outcome_as_dict_omits_empty_fields() -> None:
    from app.protocols.models import NormalizedOutcome

    body = NormalizedOutcome(success=False, topic="payment", error="timeout").as_dict()

    assert body == {"success": False, "topic": "payment", "error": "timeout", "retryable": False}
