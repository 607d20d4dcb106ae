"""Testes das settings (base, Mercado Pago e store de pedidos)."""

from __future__ import annotations

import pytest

from config.settings import BaseSettings, MercadoPagoSettings, OrderStoreSettings
from config.settings.base.core import _load_base_from_env
from config.settings.base.order_store import _load_order_store_from_env
from config.settings.mercadopago import _load_from_env


def _valid_mp(**overrides: object) -> MercadoPagoSettings:
    values: dict[str, object] = {"access_token": "APP_USR-1", "webhook_secret": "secret"}
    values.update(overrides)
    return MercadoPagoSettings(**values)  # type: ignore[arg-type]


def test_mercadopago_valid_settings() -> None:
    assert _valid_mp().validate() == []


def test_mercadopago_missing_credentials() -> None:
    errors = MercadoPagoSettings().validate()
    assert any("MERCADOPAGO_ACCESS_TOKEN" in error for error in errors)
    assert any("MERCADOPAGO_WEBHOOK_SECRET" in error for error in errors)


def test_mercadopago_test_token_in_production() -> None:
    errors = _valid_mp(access_token="TEST-123", environment="production").validate()
    assert any("TEST-" in error for error in errors)


@pytest.mark.parametrize(
    ("overrides", "fragment"),
    [
        ({"request_timeout_seconds": 0}, "TIMEOUT"),
        ({"max_retries": -1}, "MAX_RETRIES"),
        ({"environment": "staging"}, "MERCADOPAGO_ENVIRONMENT"),
    ],
)
def test_mercadopago_invalid_values(overrides: dict[str, object], fragment: str) -> None:
    assert any(fragment in error for error in _valid_mp(**overrides).validate())


def test_mercadopago_describe_has_no_secrets() -> None:
    description = _valid_mp(public_key="APP_USR-public").describe()
    assert "APP_USR-1" not in description.values()
    assert "secret" not in description.values()
    assert description["access_token_configured"] is True


def test_mercadopago_loads_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_URL", "https://shop.example/")
    monkeypatch.setenv("MERCADOPAGO_ACCESS_TOKEN", "APP_USR-9")
    monkeypatch.setenv("MERCADOPAGO_ENVIRONMENT", "prod")
    monkeypatch.setenv("MERCADOPAGO_REQUEST_TIMEOUT_SECONDS", "4.5")
    monkeypatch.delenv("MERCADOPAGO_SUCCESS_URL", raising=False)

    settings = _load_from_env()

    assert settings.access_token == "APP_USR-9"
    assert settings.environment == "production"
    assert settings.request_timeout_seconds == 4.5
    assert settings.max_retries == 0
    assert settings.back_urls["success"] == "https://shop.example/payment/success"


def test_mercadopago_unknown_environment_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MERCADOPAGO_ACCESS_TOKEN", "APP_USR-9")
    monkeypatch.setenv("MERCADOPAGO_WEBHOOK_SECRET", "secret")
    monkeypatch.setenv("MERCADOPAGO_ENVIRONMENT", "prodution")

    settings = _load_from_env()

    assert settings.environment == "prodution"
    assert settings.is_sandbox is False
    assert any("MERCADOPAGO_ENVIRONMENT" in error for error in settings.validate())


def test_base_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "stage")
    monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/0")

    settings = _load_base_from_env()

    assert settings.is_staging is True
    assert settings.redis_url == "redis://localhost:6379/0"
    assert settings.validate() == []


def test_order_store_memory_rejected_outside_development() -> None:
    errors = OrderStoreSettings(backend="memory").validate(BaseSettings(environment="production"))
    assert any("memory" in error for error in errors)


def test_order_store_redis_requires_url() -> None:
    errors = OrderStoreSettings(backend="redis").validate(BaseSettings(environment="production"))
    assert any("REDIS_URL" in error for error in errors)


def test_order_store_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ORDER_STORE_BACKEND", "REDIS")
    monkeypatch.setenv("ORDER_STORE_TTL_SECONDS", "3600")

    settings = _load_order_store_from_env()

    assert settings.backend == "redis"
    assert settings.ttl_seconds == 3600
