from fastapi import Depends
from typing import AsyncIterator
from checkout.config import Settings, settings
from checkout.core.exceptions import ConfigurationError
from checkout.core.lirapay import LiraPayClient
from checkout.services.transacao_service import TransacaoService
import logging

logger = logging.getLogger(__name__)


def get_settings() -> Settings:
    return settings


async def get_lirapay_client(
    config: Settings = Depends(get_settings),
) -> AsyncIterator[LiraPayClient]:
    """
    Cliente da LiraPay com a credencial do servidor.

    Sem LIRAPAY_API_SECRET a requisição falha aqui, antes de o corpo
    ser lido e antes de qualquer chamada de rede.
    """
    if not config.LIRAPAY_API_SECRET:
        logger.error("LIRAPAY_API_SECRET não configurado")
        raise ConfigurationError("API Secret não configurado")

    async with LiraPayClient(
        api_secret=config.LIRAPAY_API_SECRET,
        base_url=config.LIRAPAY_BASE_URL,
        timeout=config.LIRAPAY_TIMEOUT,
    ) as client:
        yield client


async def get_transacao_service(
    client: LiraPayClient = Depends(get_lirapay_client),
) -> TransacaoService:
    return TransacaoService(client)
