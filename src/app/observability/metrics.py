"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
posteriormente (BigQuery, CloudWatch Insights, etc.).

Métricas suportadas:
- Latência: tempo de execução por componente/operação
- Webhook: counter de notificações por tópico e resultado
- Chamadas remotas: counter de chamadas à API do Mercado Pago por status

Uso:
    start = time.perf_counter()
    # ... operação ...
    record_latency("notification_dispatcher", "dispatch", elapsed_ms, correlation_id)
    record_webhook_outcome("payment", "processed", correlation_id)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "notification_dispatcher")
        operation: Nome da operação (ex: "dispatch", "get_payment")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_webhook_outcome(
    topic: str,
    result: str,
    correlation_id: str | None = None,
) -> None:
    """Registra resultado do processamento de uma notificação.

    Args:
        topic: Tópico da notificação (payment, merchant_order, ...)
        result: processed|unhandled|rejected|failed
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_webhook_outcome",
        extra={
            "metric_type": "webhook_outcome",
            "component": "webhook",
            "topic": topic,
            "result": result,
            "correlation_id": correlation_id,
        },
    )


def record_remote_call(
    operation: str,
    status_code: int | None,
    latency_ms: float,
) -> None:
    """Registra chamada à API do Mercado Pago.

    Args:
        operation: Nome da operação (ex: "get_payment")
        status_code: Status HTTP (None em timeout/erro de conexão)
        latency_ms: Latência em milissegundos
    """
    logger.info(
        "metric_remote_call",
        extra={
            "metric_type": "remote_call",
            "component": "mercadopago_api",
            "operation": operation,
            "status_code": status_code,
            "latency_ms": round(latency_ms, 2),
        },
    )
