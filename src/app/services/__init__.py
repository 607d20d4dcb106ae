"""Serviços de aplicação.

Unidades reutilizáveis de orquestração (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.notification_dispatcher import NotificationDispatcher
from app.services.order_status import OrderStatusUpdater

__all__ = [
    "NotificationDispatcher",
    "OrderStatusUpdater",
]
