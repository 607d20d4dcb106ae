"""Testes da verificação de assinatura x-signature do Mercado Pago."""

from __future__ import annotations

import hashlib
import hmac
import logging

import pytest

from api.connectors.mercadopago.signature import (
    WebhookSignatureVerifier,
    build_manifest,
    compute_signature,
    parse_signature_header,
    verify_webhook_signature,
)

SECRET = "whsec-test"
DATA_ID = "123456"
REQUEST_ID = "bb56a2f1-6aae-46ac-982e-9dcd3581d08e"
TS = "1704908010"


def _header(secret: str = SECRET, data_id: str = DATA_ID, ts: str = TS) -> str:
    manifest = f"id:{data_id};request-id:{REQUEST_ID};ts:{ts};"
    digest = hmac.new(secret.encode("utf-8"), manifest.encode("utf-8"), hashlib.sha256)
    return f"ts={ts},v1={digest.hexdigest()}"


def test_valid_signature_accepted() -> None:
    result = verify_webhook_signature(_header(), REQUEST_ID, DATA_ID, SECRET)

    assert result.valid is True
    assert result.error is None


def test_tampered_digest_rejected() -> None:
    header = _header()
    last = header[-1]
    tampered = header[:-1] + ("0" if last != "0" else "1")

    result = verify_webhook_signature(tampered, REQUEST_ID, DATA_ID, SECRET)

    assert result.valid is False
    assert result.error == "signature_mismatch"


def test_other_data_id_rejected() -> None:
    result = verify_webhook_signature(_header(), REQUEST_ID, "999", SECRET)

    assert result.valid is False


@pytest.mark.parametrize("secret", [None, ""])
def test_missing_secret_fails_closed(secret: str | None) -> None:
    result = verify_webhook_signature(_header(), REQUEST_ID, DATA_ID, secret)

    assert result.valid is False
    assert result.error == "missing_secret"


def test_missing_header_fails_closed() -> None:
    result = verify_webhook_signature(None, REQUEST_ID, DATA_ID, SECRET)

    assert result.valid is False
    assert result.error == "missing_signature"


@pytest.mark.parametrize("header", ["garbage", "ts=,v1=abc", "v1=abc", "ts=123", ",,,"])
def test_malformed_header_fails_closed(header: str) -> None:
    result = verify_webhook_signature(header, REQUEST_ID, DATA_ID, SECRET)

    assert result.valid is False
    assert result.error == "malformed_signature"


def test_non_hex_digest_does_not_raise() -> None:
    result = verify_webhook_signature("ts=1,v1=não-hex-✓", REQUEST_ID, DATA_ID, SECRET)

    assert result.valid is False


def test_parse_header_trims_segments_and_ignores_extras() -> None:
    parsed = parse_signature_header(" ts = 42 , v1 = abc , extra")

    assert parsed is not None
    assert parsed.ts == "42"
    assert parsed.v1 == "abc"


def test_manifest_format_and_absent_values() -> None:
    assert build_manifest("1", "r", "9") == "id:1;request-id:r;ts:9;"
    assert build_manifest(None, None, "9") == "id:;request-id:;ts:9;"


def test_manifest_and_digest_are_deterministic() -> None:
    manifests = {build_manifest(DATA_ID, REQUEST_ID, TS) for _ in range(3)}
    digests = {compute_signature(next(iter(manifests)), SECRET) for _ in range(3)}

    assert len(manifests) == 1
    assert len(digests) == 1


def test_rejection_logs_digests_but_not_secret(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="api.connectors.mercadopago.signature")

    verify_webhook_signature("ts=1,v1=deadbeef", REQUEST_ID, DATA_ID, SECRET)

    record = next(r for r in caplog.records if r.getMessage() == "webhook_signature_rejected")
    assert record.reason == "signature_mismatch"
    assert record.received_signature == "deadbeef"
    assert record.manifest == f"id:{DATA_ID};request-id:{REQUEST_ID};ts:1;"
    assert all(SECRET not in str(value) for value in record.__dict__.values())


def test_verifier_uses_injected_secret() -> None:
    verifier = WebhookSignatureVerifier(SECRET)

    assert verifier.configured is True
    assert verifier.verify(_header(), REQUEST_ID, DATA_ID) is True
    assert verifier.verify(_header(secret="other"), REQUEST_ID, DATA_ID) is False


def test_verifier_without_secret_rejects_everything() -> None:
    verifier = WebhookSignatureVerifier("")

    assert verifier.configured is False
    assert verifier.verify(_header(), REQUEST_ID, DATA_ID) is False
