"""Cliente HTTP especializado para a API do Mercado Pago.

Estende HttpClient genérico com comportamentos específicos:
- Autenticação Bearer com access token validado na construção
- Timeout explícito em toda chamada (timeout vira erro retentável)
- Classificação de erros (404/4xx permanentes, 429/5xx transitórios)
- Conversão da resposta em registros tipados (PaymentRecord, ...)
- Logging estruturado sem token e sem dados do comprador
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from app.observability import record_remote_call
from app.protocols.models import MerchantOrderRecord, PaymentRecord, PreferenceRecord
from utils.errors import ConfigurationError

from .http_base import HttpClient, HttpClientConfig, HttpError
from .models import parse_record
from .mp_errors import MercadoPagoApiError, parse_mp_error
from .mp_logging import log_mp_error, log_success

if TYPE_CHECKING:
    import httpx

    from config.settings import MercadoPagoSettings

logger: logging.Logger = logging.getLogger(__name__)

PAYMENTS_PATH = "/v1/payments/{id}"
MERCHANT_ORDERS_PATH = "/merchant_orders/{id}"
PREFERENCES_PATH = "/checkout/preferences"

_HTTP_ERROR_CODES = {
    "http_timeout": "timeout",
    "http_connection_error": "connection_error",
    "http_retry_exhausted": "retry_exhausted",
}


class MercadoPagoHttpClient(HttpClient):
    """Cliente da API do Mercado Pago.

    Args:
        access_token: Bearer token da aplicação (obrigatório)
        config: Configuração HTTP base (base_url, timeout, retries)
        transport: Transport httpx opcional (testes)

    Raises:
        ValueError: Se access_token está vazio
    """

    def __init__(
        self,
        access_token: str,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not access_token or not access_token.strip():
            raise ValueError(
                "access_token é obrigatório. "
                "Verifique se MERCADOPAGO_ACCESS_TOKEN está configurado."
            )
        super().__init__(config, transport)
        self._access_token = access_token.strip()

    async def get_payment(self, payment_id: str) -> PaymentRecord:
        """Busca pagamento por ID (GET /v1/payments/{id})."""
        path = PAYMENTS_PATH.format(id=quote(str(payment_id), safe=""))
        data = await self._call("GET", path, operation="get_payment")
        return parse_record(PaymentRecord, data)

    async def get_merchant_order(self, merchant_order_id: str) -> MerchantOrderRecord:
        """Busca merchant order por ID (GET /merchant_orders/{id})."""
        path = MERCHANT_ORDERS_PATH.format(id=quote(str(merchant_order_id), safe=""))
        data = await self._call("GET", path, operation="get_merchant_order")
        return parse_record(MerchantOrderRecord, data)

    async def create_preference(self, payload: dict[str, Any]) -> PreferenceRecord:
        """Cria preferência de checkout (POST /checkout/preferences)."""
        data = await self._call(
            "POST",
            PREFERENCES_PATH,
            operation="create_preference",
            json=payload,
            extra_headers={"X-Idempotency-Key": str(uuid.uuid4())},
        )
        return parse_record(PreferenceRecord, data)

    def _auth_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Authorization": f"Bearer {self._access_token}",
        }

    async def _call(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        json: dict[str, Any] | None = None,
        extra_headers: dict[str, str] | None = None,
    ) -> Any:
        headers = {**self._auth_headers(), **(extra_headers or {})}
        started_at = time.perf_counter()
        status_code: int | None = None
        try:
            response = await self.request(method, path, json=json, headers=headers)
            status_code = response.status_code
        except HttpError as exc:
            status_code = exc.status_code
            error = _from_http_error(exc)
            log_mp_error(error, method, path)
            raise error from exc
        finally:
            record_remote_call(operation, status_code, (time.perf_counter() - started_at) * 1000)

        return self._process_response(response, method, path)

    def _process_response(self, response: httpx.Response, method: str, path: str) -> Any:
        try:
            data = response.json()
        except ValueError:
            data = None

        if response.status_code >= 400:
            error = parse_mp_error(response.status_code, data)
            log_mp_error(error, method, path)
            raise error

        if data is None:
            error = MercadoPagoApiError(
                "Response JSON inválido",
                error_code="invalid_response",
                status_code=response.status_code,
            )
            log_mp_error(error, method, path)
            raise error

        log_success(method, path, response.status_code)
        return data


def _from_http_error(exc: HttpError) -> MercadoPagoApiError:
    message = str(exc)
    if exc.status_code is not None:
        code = "rate_limited" if exc.status_code == 429 else "server_error"
        return MercadoPagoApiError(
            f"HTTP {exc.status_code}",
            error_code=code,
            status_code=exc.status_code,
            retryable=True,
        )
    return MercadoPagoApiError(
        message,
        error_code=_HTTP_ERROR_CODES.get(message, "http_error"),
        retryable=exc.is_retryable,
    )


def create_mercadopago_http_client(
    settings: MercadoPagoSettings | None = None,
) -> MercadoPagoHttpClient:
    """Factory para criar cliente Mercado Pago com config padrão.

    Args:
        settings: MercadoPagoSettings opcional. Se None, carrega do ambiente.

    Raises:
        ConfigurationError: Se MERCADOPAGO_ACCESS_TOKEN não estiver configurado
    """
    # Import local para evitar dependência circular
    from config.settings import get_mercadopago_settings

    mercadopago = settings or get_mercadopago_settings()
    if not mercadopago.access_token:
        raise ConfigurationError("MERCADOPAGO_ACCESS_TOKEN não configurado")

    config = HttpClientConfig(
        base_url=mercadopago.api_base_url,
        timeout_seconds=mercadopago.request_timeout_seconds,
        max_retries=mercadopago.max_retries,
    )
    return MercadoPagoHttpClient(mercadopago.access_token, config=config)
