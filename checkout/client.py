"""
Cliente da API do checkout (/api/create-transaction e /api/check-transaction)

É o lado "navegador" do fluxo: envia o pedido montado a partir do formulário
e consulta o status enquanto o QR Code está na tela.
"""

from typing import Any, Dict, Optional
from checkout.core.exceptions import ProviderError, TransientPollError
from checkout.schemas.transacao import Transaction
from pydantic import ValidationError as PydanticValidationError
from urllib.parse import quote
import httpx
import logging
import time

logger = logging.getLogger(__name__)


class CheckoutApiClient:
    """
    Cliente assíncrono para a API do checkout
    """

    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "CheckoutApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def criar_transacao(self, pedido: Dict[str, Any]) -> Transaction:
        """
        Envia o pedido e devolve a transação PIX criada

        Raises:
            ProviderError: a API respondeu com hasError (mensagem para o alerta)
            httpx.HTTPError: falha de rede
        """
        inicio = time.monotonic()
        logger.info(f"Enviando pedido {pedido.get('external_id')} para a API...")

        response = await self._client.post("/api/create-transaction", json=pedido)

        logger.info(f"Resposta da API recebida: {int((time.monotonic() - inicio) * 1000)} ms")

        try:
            result = response.json()
        except ValueError:
            result = {}

        if not isinstance(result, dict) or result.get("hasError") or not result.get("id"):
            mensagem = None
            if isinstance(result, dict):
                mensagem = result.get("message") or result.get("error")
            logger.error(f"Erro na API: {result}")
            raise ProviderError(
                mensagem or "Erro desconhecido",
                status_code=response.status_code if response.is_error else 400,
                details=result or None,
            )

        logger.info(f"PIX gerado com sucesso: {result['id']}")
        return Transaction.model_validate(result)

    async def consultar_transacao(self, transaction_id: str) -> Transaction:
        """
        Consulta o status da transação

        Raises:
            TransientPollError: qualquer falha (rede, erro da API, resposta inválida)
        """
        try:
            response = await self._client.get(
                f"/api/check-transaction/{quote(str(transaction_id), safe='')}"
            )
            result = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise TransientPollError(f"Falha na consulta de {transaction_id}: {e}") from e

        if not response.is_success or not isinstance(result, dict) or result.get("hasError"):
            mensagem = result.get("message") if isinstance(result, dict) else None
            raise TransientPollError(
                mensagem or f"Erro ao consultar transação {transaction_id}",
                status_code=response.status_code,
            )

        try:
            return Transaction.model_validate(result)
        except PydanticValidationError as e:
            raise TransientPollError(f"Resposta inválida para {transaction_id}") from e
