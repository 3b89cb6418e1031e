from typing import Any, Callable, Optional
from checkout.client import CheckoutApiClient
from checkout.schemas.transacao import STATUS_AUTORIZADO, Transaction
from checkout.services.qrcode_pix import gerar_qr_code_data_url
from checkout.services.status_poller import StatusPoller
import logging

logger = logging.getLogger(__name__)


class SessaoPagamentoPix:
    """
    Tela de pagamento PIX pendente.

    Ao entrar: gera o QR Code do copia e cola e começa a verificar o status.
    Ao sair: cancela a verificação.

        async with SessaoPagamentoPix(transacao, api) as sessao:
            exibir(sessao.qr_code, sessao.copia_e_cola)
            ...
    """

    def __init__(
        self,
        transacao: Transaction,
        api: CheckoutApiClient,
        intervalo: float = 5.0,
        on_aprovado: Optional[Callable[[str], Any]] = None,
        on_status_change: Optional[Callable[[str, str], Any]] = None,
    ):
        if transacao.pix is None:
            raise ValueError(f"Transação {transacao.id} sem dados PIX")

        self.transacao = transacao
        self.qr_code: Optional[str] = None
        self.poller = StatusPoller(
            transaction_id=transacao.id,
            status=transacao.status,
            fetch=api.consultar_transacao,
            interval=intervalo,
            on_status_change=on_status_change,
            on_authorized=on_aprovado,
        )

    @property
    def copia_e_cola(self) -> str:
        """Código PIX para copiar e colar no app do banco"""
        return self.transacao.pix.payload

    @property
    def status(self) -> str:
        return self.poller.status

    @property
    def aprovado(self) -> bool:
        return self.poller.status == STATUS_AUTORIZADO

    async def verificar_agora(self) -> str:
        """Verificação manual, a mesma usada pelo timer"""
        return await self.poller.refresh()

    async def __aenter__(self) -> "SessaoPagamentoPix":
        self.qr_code = gerar_qr_code_data_url(self.copia_e_cola)
        self.poller.start()
        logger.info(f"Aguardando pagamento da transação {self.transacao.id}")
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.poller.stop()
