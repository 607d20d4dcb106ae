"""Settings específicas de Mercado Pago.

Credenciais, webhook e URLs de retorno do checkout.
Consumidas pelo verificador de assinatura, pelo cliente da API e pelas rotas.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

# Constantes da API
MERCADOPAGO_API_BASE_URL: str = "https://api.mercadopago.com"
DEFAULT_WEBHOOK_ENDPOINT: str = "/webhooks/mercadopago"
DEFAULT_STATEMENT_DESCRIPTOR: str = "Kommerce Store"

MercadoPagoEnvironment = Literal["sandbox", "production"]


@dataclass(frozen=True)
class MercadoPagoSettings:
    """Configurações da integração Mercado Pago.

    Attributes:
        access_token: Token de acesso (Bearer) à API
        public_key: Chave pública usada pelo checkout no frontend
        environment: sandbox|production
        webhook_secret: Secret para validação HMAC das notificações
        webhook_endpoint: Caminho do endpoint de webhook
        notification_url: URL absoluta enviada na preferência (opcional)
        success_url: URL de retorno para pagamento aprovado
        failure_url: URL de retorno para pagamento recusado
        pending_url: URL de retorno para pagamento pendente
        api_base_url: URL base da API
        request_timeout_seconds: Timeout explícito das chamadas remotas
        max_retries: Tentativas extras para erros transitórios
        statement_descriptor: Descrição exibida na fatura do comprador
    """

    # Credenciais (carregadas de env)
    access_token: str = ""
    public_key: str = ""
    environment: MercadoPagoEnvironment = "sandbox"

    # Webhook
    webhook_secret: str = ""
    webhook_endpoint: str = DEFAULT_WEBHOOK_ENDPOINT
    notification_url: str = ""

    # URLs de retorno
    success_url: str = ""
    failure_url: str = ""
    pending_url: str = ""

    # API
    api_base_url: str = MERCADOPAGO_API_BASE_URL
    request_timeout_seconds: float = 10.0
    max_retries: int = 0

    statement_descriptor: str = DEFAULT_STATEMENT_DESCRIPTOR

    @property
    def is_sandbox(self) -> bool:
        """Retorna True se integração está em sandbox."""
        return self.environment == "sandbox"

    @property
    def back_urls(self) -> dict[str, str]:
        """URLs de retorno no formato esperado pela preferência."""
        return {
            "success": self.success_url,
            "failure": self.failure_url,
            "pending": self.pending_url,
        }

    def validate(self) -> list[str]:
        """Valida configurações mínimas de Mercado Pago.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.access_token:
            errors.append("MERCADOPAGO_ACCESS_TOKEN não configurado")

        if not self.webhook_secret:
            errors.append("MERCADOPAGO_WEBHOOK_SECRET não configurado")

        if self.environment not in ("sandbox", "production"):
            errors.append(
                "MERCADOPAGO_ENVIRONMENT deve ser 'sandbox' ou 'production'"
            )

        if self.access_token.startswith("TEST-") and self.environment == "production":
            errors.append(
                "MERCADOPAGO_ACCESS_TOKEN de teste (TEST-) com MERCADOPAGO_ENVIRONMENT=production"
            )

        if self.request_timeout_seconds <= 0:
            errors.append("MERCADOPAGO_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("MERCADOPAGO_MAX_RETRIES deve ser >= 0")

        return errors

    def describe(self) -> dict[str, object]:
        """Resumo da configuração sem credenciais (para diagnóstico)."""
        return {
            "access_token_configured": bool(self.access_token),
            "public_key_configured": bool(self.public_key),
            "webhook_secret_configured": bool(self.webhook_secret),
            "environment": self.environment,
            "success_url": self.success_url,
            "failure_url": self.failure_url,
            "pending_url": self.pending_url,
        }


def _parse_mp_environment(env_str: str) -> str:
    value = env_str.strip().lower()
    if value in ("production", "prod"):
        return "production"
    if value in ("sandbox", "test", ""):
        return "sandbox"
    # Valor desconhecido segue adiante para validate() rejeitar
    return value


def _load_from_env() -> MercadoPagoSettings:
    """Carrega MercadoPagoSettings a partir de variáveis de ambiente."""
    app_url = os.getenv("APP_URL", "http://localhost:8080").rstrip("/")
    return MercadoPagoSettings(
        access_token=os.getenv("MERCADOPAGO_ACCESS_TOKEN", ""),
        public_key=os.getenv("MERCADOPAGO_PUBLIC_KEY", ""),
        environment=_parse_mp_environment(os.getenv("MERCADOPAGO_ENVIRONMENT", "sandbox")),
        webhook_secret=os.getenv("MERCADOPAGO_WEBHOOK_SECRET", ""),
        webhook_endpoint=os.getenv(
            "MERCADOPAGO_WEBHOOK_ENDPOINT", DEFAULT_WEBHOOK_ENDPOINT
        ),
        notification_url=os.getenv("MERCADOPAGO_NOTIFICATION_URL", ""),
        success_url=os.getenv("MERCADOPAGO_SUCCESS_URL", f"{app_url}/payment/success"),
        failure_url=os.getenv("MERCADOPAGO_FAILURE_URL", f"{app_url}/payment/failure"),
        pending_url=os.getenv("MERCADOPAGO_PENDING_URL", f"{app_url}/payment/pending"),
        api_base_url=os.getenv("MERCADOPAGO_API_BASE_URL", MERCADOPAGO_API_BASE_URL),
        request_timeout_seconds=float(
            os.getenv("MERCADOPAGO_REQUEST_TIMEOUT_SECONDS", "10")
        ),
        max_retries=int(os.getenv("MERCADOPAGO_MAX_RETRIES", "0")),
        statement_descriptor=os.getenv(
            "MERCADOPAGO_STATEMENT_DESCRIPTOR", DEFAULT_STATEMENT_DESCRIPTOR
        ),
    )


@lru_cache(maxsize=1)
def get_mercadopago_settings() -> MercadoPagoSettings:
    """Retorna instância cacheada de MercadoPagoSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
