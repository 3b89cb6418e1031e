"""
Rotas de transações PIX
"""

from fastapi import APIRouter, Depends, Request
from typing import Optional

from checkout.api.deps import get_transacao_service
from checkout.core.exceptions import CheckoutError
from checkout.services.transacao_builder import montar_transacao
from checkout.services.transacao_service import TransacaoService
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


def _ip_cliente(request: Request) -> Optional[str]:
    encaminhado = request.headers.get("x-forwarded-for")
    if encaminhado:
        return encaminhado.split(",")[0].strip()
    return request.client.host if request.client else None


@router.post("/create-transaction")
async def criar_transacao(
    request: Request,
    service: TransacaoService = Depends(get_transacao_service),
):
    """
    Cria a transação PIX na LiraPay

    Fluxo:
    1. Valida os campos obrigatórios do pedido
    2. Normaliza cliente e itens no formato da LiraPay
    3. Envia para a LiraPay (timeout de 10s)
    4. Retorna a transação com o copia e cola (pix.payload)

    Erros retornam {hasError: true, message, details?} com o status adequado
    (400, 408, 500 ou o status da LiraPay).
    """
    try:
        body = await request.json()
        logger.info(f"Pedido recebido: {body.get('external_id') if isinstance(body, dict) else None}")

        transacao_request = montar_transacao(body, ip=_ip_cliente(request))
        transacao = await service.criar(transacao_request)

        return transacao

    except CheckoutError:
        raise
    except Exception as e:
        logger.error(f"❌ Erro ao criar transação: {str(e)}")
        raise CheckoutError("Erro interno do servidor") from e


@router.get("/check-transaction/{transaction_id}")
async def consultar_transacao(
    transaction_id: str,
    service: TransacaoService = Depends(get_transacao_service),
):
    """
    Consulta o status da transação na LiraPay

    Returns:
        A transação como a LiraPay devolveu
    """
    try:
        transacao = await service.consultar(transaction_id)
        return transacao

    except CheckoutError:
        raise
    except Exception as e:
        logger.error(f"Erro ao consultar transação {transaction_id}: {str(e)}")
        raise CheckoutError("Erro interno do servidor") from e
