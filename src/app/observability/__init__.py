"""Observabilidade — logs estruturados, correlation_id e métricas.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_latency, record_webhook_outcome
"""

from app.observability.correlation import (
    correlation_id_from_headers,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_latency,
    record_remote_call,
    record_webhook_outcome,
)

__all__ = [
    "correlation_id_from_headers",
    "generate_correlation_id",
    "get_correlation_id",
    "record_latency",
    "record_remote_call",
    "record_webhook_outcome",
    "reset_correlation_id",
    "set_correlation_id",
]
