"""App — coração do sistema: orquestração e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- services/: despacho de notificações e status de pedidos
- infra/: implementações concretas de IO (stores)
- protocols/: contratos/interfaces
- observability/: logs estruturados, correlation_id, métricas

Padrão: app executa; api adapta; config parametriza; utils apoia.
"""
