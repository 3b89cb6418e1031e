from typing import Any, Dict, Optional
from checkout.core.exceptions import ProviderError, ProviderTimeoutError
from checkout.core.lirapay import LiraPayClient
from checkout.schemas.transacao import TransactionRequest
import asyncio
import httpx
import logging
import time

logger = logging.getLogger(__name__)


MENSAGEM_ERRO_PADRAO = "Erro ao processar pagamento"
MENSAGEM_ERRO_CONSULTA = "Erro ao consultar transação"
MENSAGEM_TIMEOUT = "Timeout na comunicação com o servidor de pagamentos"


def extrair_mensagem_erro(data: Optional[Dict[str, Any]]) -> str:
    """
    Mensagem legível a partir do erro da LiraPay.

    Precedência:
    1. errorFields (lista de campos inválidos)
    2. error (mensagem única)
    3. mensagem genérica
    """
    if not isinstance(data, dict):
        return MENSAGEM_ERRO_PADRAO

    campos = data.get("errorFields")
    if campos:
        return f"Erro de validação: {', '.join(str(c) for c in campos)}"

    if data.get("error"):
        return str(data["error"])

    return MENSAGEM_ERRO_PADRAO


def _ler_json(response: httpx.Response) -> Optional[Any]:
    try:
        return response.json()
    except ValueError:
        logger.warning(f"Resposta da LiraPay sem JSON válido: {response.status_code}")
        return None


class TransacaoService:
    """
    Serviço de criação e consulta de transações PIX na LiraPay.
    Uma única tentativa por chamada, sem retry.
    """

    def __init__(self, client: LiraPayClient):
        self.client = client

    async def criar(self, request: TransactionRequest) -> Dict[str, Any]:
        """
        Cria a transação PIX

        Args:
            request: Requisição já normalizada

        Returns:
            JSON da transação como a LiraPay devolveu (com pix.payload)

        Raises:
            ProviderTimeoutError: LiraPay não respondeu dentro do limite
            ProviderError: LiraPay recusou a transação
        """
        inicio = time.monotonic()
        logger.info(f"Enviando para LiraPay - external_id: {request.external_id}, Valor: R$ {request.total_amount}")

        try:
            response = await self.client.criar_transacao(request.to_payload())
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.error(f"⏱️ Timeout na chamada LiraPay ({self.client.timeout}s)")
            raise ProviderTimeoutError(MENSAGEM_TIMEOUT) from e

        logger.info(f"Resposta LiraPay recebida: {_decorrido_ms(inicio)} ms")

        data = _ler_json(response)
        tem_erro = isinstance(data, dict) and bool(data.get("hasError"))

        if not response.is_success or tem_erro or not isinstance(data, dict):
            logger.error(f"❌ Erro na resposta LiraPay: {response.status_code} - {data}")
            raise ProviderError(
                extrair_mensagem_erro(data),
                status_code=response.status_code if response.is_error else 400,
                details=data,
            )

        logger.info(f"✅ Transação criada: {data.get('id')} ({data.get('status')}) em {_decorrido_ms(inicio)} ms")
        return data

    async def consultar(self, transaction_id: str) -> Dict[str, Any]:
        """
        Consulta o status atual da transação

        Returns:
            JSON da transação como a LiraPay devolveu

        Raises:
            ProviderError: LiraPay respondeu com erro
        """
        response = await self.client.consultar_transacao(transaction_id)
        data = _ler_json(response)

        if not response.is_success or not isinstance(data, dict):
            mensagem = data.get("message") if isinstance(data, dict) else None
            logger.error(f"Erro ao consultar transação {transaction_id}: {response.status_code}")
            raise ProviderError(
                mensagem or MENSAGEM_ERRO_CONSULTA,
                status_code=response.status_code if response.is_error else 500,
            )

        return data


def _decorrido_ms(inicio: float) -> int:
    return int((time.monotonic() - inicio) * 1000)
