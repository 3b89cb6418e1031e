from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from checkout.schemas.transacao import (
    STATUS_AUTORIZADO,
    STATUS_CHARGEBACK,
    STATUS_FALHOU,
    WebhookPayload,
)
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/webhook")
async def webhook_lirapay(request: Request):
    """
    Webhook da LiraPay para notificações de status

    Não há banco de dados: a notificação só é registrada em log.
    A LiraPay reenvia em respostas diferentes de 2xx, então qualquer
    corpo que dê para ler recebe 200.

    Returns:
        {received: true} com 200, ou {error} com 500 se o corpo for ilegível
    """
    try:
        body = await request.json()
        if not isinstance(body, dict):
            raise ValueError(f"Webhook sem objeto JSON: {type(body).__name__}")

        payload = WebhookPayload.model_validate(body)

        logger.info(f"Webhook recebido: {body}")

        if payload.status == STATUS_AUTORIZADO:
            logger.info(f"✅ Pagamento aprovado para transação {payload.id}")
        elif payload.status == STATUS_FALHOU:
            logger.warning(f"❌ Pagamento falhou para transação {payload.id}")
        elif payload.status == STATUS_CHARGEBACK:
            logger.warning(f"⚠️ Chargeback para transação {payload.id}")
        else:
            logger.info(f"Status {payload.status} para transação {payload.id}")

        return {"received": True}

    except Exception as e:
        logger.error(f"Erro ao processar webhook: {str(e)}")
        return JSONResponse(status_code=500, content={"error": "Erro ao processar webhook"})
