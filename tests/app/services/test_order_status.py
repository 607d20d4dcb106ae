"""Testes da política de status de pedidos."""

from __future__ import annotations

import pytest

from app.infra.stores import MemoryOrderStore
from app.protocols.models import PaymentRecord
from app.protocols.order_store import OrderState
from app.services.order_status import (
    OrderStatusUpdater,
    map_payment_status,
    should_replace,
)


def _payment(status: str, reference: str | None = "order-1", payment_id: str = "1") -> PaymentRecord:
    return PaymentRecord(id=payment_id, status=status, external_reference=reference)


def _state(status: str) -> OrderState:
    return OrderState(
        reference="order-1",
        status=status,
        payment_id="1",
        payment_status=status,
        updated_at=0.0,
    )


@pytest.mark.parametrize(
    ("payment_status", "order_status"),
    [
        ("approved", "paid"),
        ("authorized", "authorized"),
        ("in_process", "pending"),
        ("rejected", "failed"),
        ("cancelled", "failed"),
        ("charged_back", "refunded"),
        ("APPROVED", "paid"),
        ("something_new", None),
    ],
)
def test_map_payment_status(payment_status: str, order_status: str | None) -> None:
    assert map_payment_status(payment_status) == order_status


def test_should_replace_is_monotonic() -> None:
    assert should_replace(None, _state("pending")) is True
    assert should_replace(_state("pending"), _state("paid")) is True
    assert should_replace(_state("paid"), _state("pending")) is False
    assert should_replace(_state("paid"), _state("paid")) is False
    assert should_replace(_state("failed"), _state("paid")) is True
    assert should_replace(_state("paid"), _state("failed")) is False
    assert should_replace(_state("paid"), _state("refunded")) is True


@pytest.mark.asyncio
async def test_stale_status_does_not_overwrite() -> None:
    store = MemoryOrderStore()
    updater = OrderStatusUpdater(store)

    await updater.update(_payment("approved"))
    await updater.update(_payment("pending"))

    state = await store.get("order-1")
    assert state is not None
    assert state.status == "paid"
    assert state.payment_status == "approved"


@pytest.mark.asyncio
async def test_duplicate_delivery_converges() -> None:
    store = MemoryOrderStore()
    updater = OrderStatusUpdater(store)

    await updater.update(_payment("approved"))
    first = await store.get("order-1")
    await updater.update(_payment("approved"))
    second = await store.get("order-1")

    assert first == second


@pytest.mark.asyncio
async def test_payment_without_reference_is_skipped() -> None:
    store = MemoryOrderStore()

    await OrderStatusUpdater(store).update(_payment("approved", reference=None))

    assert store._store == {}


@pytest.mark.asyncio
async def test_unknown_status_is_ignored() -> None:
    store = MemoryOrderStore()

    await OrderStatusUpdater(store).update(_payment("mystery"))

    assert await store.get("order-1") is None
