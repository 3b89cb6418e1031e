import httpx
from typing import Any, Dict, Optional
from urllib.parse import quote
import asyncio
import logging

logger = logging.getLogger(__name__)


class LiraPayClient:
    """
    Cliente HTTP para a API da LiraPay usando httpx.
    A credencial é recebida no construtor e enviada no header api-secret.
    Usa um httpx.AsyncClient persistente para reutilizar conexões TCP/SSL.
    """

    def __init__(
        self,
        api_secret: str,
        base_url: str = "https://api.lirapaybr.com",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {"api-secret": api_secret}
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            transport=transport,
        )

    async def __aenter__(self) -> "LiraPayClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def criar_transacao(self, payload: Dict[str, Any]) -> httpx.Response:
        """
        POST /v1/transactions com limite total de self.timeout segundos

        Raises:
            httpx.TimeoutException / asyncio.TimeoutError: tempo esgotado
            httpx.RequestError: falha de rede
        """
        return await asyncio.wait_for(
            self._client.post("/v1/transactions", json=payload, timeout=self.timeout),
            timeout=self.timeout,
        )

    async def consultar_transacao(self, transaction_id: str) -> httpx.Response:
        """GET /v1/transactions/{id} (timeout padrão do httpx)"""
        return await self._client.get(f"/v1/transactions/{quote(str(transaction_id), safe='')}")
