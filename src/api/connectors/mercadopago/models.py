"""Reexports dos registros tipados e parsing das respostas da API.

Os contratos canônicos residem em app/protocols/models.py.
Aqui a resposta JSON é convertida em registro tipado; campos obrigatórios
ausentes são rejeitados explicitamente.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from app.protocols.models import (
    MerchantOrderRecord,
    NormalizedOutcome,
    NotificationEnvelope,
    PaymentRecord,
    PreferenceRecord,
)

from .mp_errors import MercadoPagoApiError

RecordT = TypeVar("RecordT", bound=BaseModel)


def parse_record(model: type[RecordT], response_data: Any) -> RecordT:
    """Valida resposta da API contra o registro esperado.

    Raises:
        MercadoPagoApiError: Se corpo não for objeto ou faltar campo obrigatório
    """
    if not isinstance(response_data, dict):
        raise MercadoPagoApiError(
            "response_not_object",
            error_code="invalid_response",
        )
    try:
        return model.model_validate(response_data)
    except ValidationError as exc:
        missing = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
        raise MercadoPagoApiError(
            f"invalid {model.__name__}: {', '.join(missing) or 'schema'}",
            error_code="invalid_response",
        ) from exc


__all__ = [
    "MerchantOrderRecord",
    "NormalizedOutcome",
    "NotificationEnvelope",
    "PaymentRecord",
    "PreferenceRecord",
    "parse_record",
]
