"""Validação do pedido de criação de preferência e montagem do payload.

O corpo recebido do frontend é validado com pydantic; o payload enviado ao
Mercado Pago (POST /checkout/preferences) é montado a partir do modelo
validado e das settings, nunca do dicionário bruto.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

if TYPE_CHECKING:
    from config.settings import MercadoPagoSettings

DEFAULT_CURRENCY_ID = "ARS"
MAX_TITLE_LENGTH = 255
MAX_DESCRIPTION_LENGTH = 500
MAX_REFERENCE_LENGTH = 255
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class PreferenceValidationError(ValueError):
    """Corpo inválido para criação de preferência.

    Attributes:
        details: Mensagens de erro por campo (ex: {"items.0.title": [...]})
    """

    def __init__(self, details: dict[str, list[str]]) -> None:
        super().__init__("invalid_preference_request")
        self.details = details


class PreferenceItem(BaseModel):
    """Item do carrinho."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = Field(default=None, max_length=255)
    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)
    quantity: int = Field(..., ge=1)
    unit_price: float = Field(..., ge=0.01)
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    currency_id: str = Field(default=DEFAULT_CURRENCY_ID, min_length=3, max_length=3)


class PayerPhone(BaseModel):
    model_config = ConfigDict(extra="ignore")

    area_code: str = ""
    number: str = ""


class PayerIdentification(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str = Field(..., min_length=1)
    number: str = Field(..., min_length=1)


class PayerInfo(BaseModel):
    """Dados opcionais do comprador (PII: nunca logar)."""

    model_config = ConfigDict(extra="ignore")

    email: str | None = Field(default=None, pattern=EMAIL_PATTERN, max_length=255)
    name: str | None = Field(default=None, max_length=255)
    surname: str | None = Field(default=None, max_length=255)
    phone: PayerPhone | None = None
    identification: PayerIdentification | None = None


class PreferenceRequest(BaseModel):
    """Corpo de POST /payment/create-preference."""

    model_config = ConfigDict(extra="ignore")

    items: list[PreferenceItem] = Field(..., min_length=1)
    payer: PayerInfo | None = None
    external_reference: str | None = Field(default=None, max_length=MAX_REFERENCE_LENGTH)


def _format_errors(exc: ValidationError) -> dict[str, list[str]]:
    details: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())) or "body"
        details.setdefault(field, []).append(error.get("msg", "invalid"))
    return details


def validate_preference_request(data: Any) -> PreferenceRequest:
    """Valida corpo recebido.

    Raises:
        PreferenceValidationError: Com mensagens por campo
    """
    if not isinstance(data, dict):
        raise PreferenceValidationError({"body": ["JSON object expected"]})
    try:
        return PreferenceRequest.model_validate(data)
    except ValidationError as exc:
        raise PreferenceValidationError(_format_errors(exc)) from exc


def _format_payer(payer: PayerInfo) -> dict[str, Any]:
    formatted: dict[str, Any] = {}
    for field in ("name", "surname", "email"):
        value = getattr(payer, field)
        if value is not None:
            formatted[field] = value
    if payer.phone is not None:
        formatted["phone"] = payer.phone.model_dump()
    if payer.identification is not None:
        formatted["identification"] = payer.identification.model_dump()
    return formatted


def build_preference_payload(
    request: PreferenceRequest,
    settings: MercadoPagoSettings,
) -> dict[str, Any]:
    """Monta payload de POST /checkout/preferences.

    Itens sem `id` recebem um ID gerado; `notification_url` só é enviada
    quando configurada (caso contrário vale a URL do painel).
    """
    payload: dict[str, Any] = {
        "items": [
            {
                "id": item.id or uuid.uuid4().hex[:13],
                "title": item.title,
                "description": item.description or "",
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "currency_id": item.currency_id,
            }
            for item in request.items
        ],
        "back_urls": settings.back_urls,
        "auto_return": "approved",
        "statement_descriptor": settings.statement_descriptor,
    }

    if settings.notification_url:
        payload["notification_url"] = settings.notification_url

    if request.external_reference:
        payload["external_reference"] = request.external_reference

    if request.payer is not None:
        payer = _format_payer(request.payer)
        if payer:
            payload["payer"] = payer

    return payload
