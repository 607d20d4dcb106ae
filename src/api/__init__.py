"""API — camada de borda e adapters do Mercado Pago.

Responsabilidades:
- Receber requests externos (webhook, checkout)
- Validar assinaturas e payloads
- Converter respostas da API em registros tipados
- Construir payloads para a API do Mercado Pago

Subpastas:
- connectors/: adapters HTTP por provedor
- validators/: validação de payloads e limites
- routes/: endpoints HTTP (webhook, checkout, health)

NÃO PODE conter: regras de status de pedido nem persistência.
"""
