"""
Acompanhamento do status de uma transação PIX.

O timer e a verificação manual ("já paguei") usam a mesma operação, refresh().
O loop dorme o intervalo depois de cada consulta concluída, então duas
consultas da mesma transação nunca se sobrepõem.
"""

from typing import Any, Awaitable, Callable, FrozenSet, Optional
from checkout.core.exceptions import TransientPollError
from checkout.schemas.transacao import STATUS_AUTORIZADO
import asyncio
import contextlib
import logging

logger = logging.getLogger(__name__)


BuscarStatus = Callable[[str], Awaitable[Any]]
AoMudarStatus = Callable[[str, str], Any]
AoAprovar = Callable[[str], Any]


def _status_de(resposta: Any) -> str:
    status = resposta.get("status") if isinstance(resposta, dict) else getattr(resposta, "status", None)
    if not status:
        raise TransientPollError(f"Resposta sem status: {resposta!r}")
    return str(status)


async def _chamar(callback: Optional[Callable[..., Any]], *args: Any) -> None:
    if callback is None:
        return
    resultado = callback(*args)
    if asyncio.iscoroutine(resultado):
        await resultado


class StatusPoller:
    """
    Consulta o status de uma transação a cada `interval` segundos.

    Só AUTHORIZED é terminal por padrão: depois dele os ticks continuam
    agendados mas não fazem mais chamadas de rede. FAILED e CHARGEBACK
    seguem sendo consultados.
    """

    def __init__(
        self,
        transaction_id: str,
        status: str,
        fetch: BuscarStatus,
        interval: float = 5.0,
        on_status_change: Optional[AoMudarStatus] = None,
        on_authorized: Optional[AoAprovar] = None,
        status_terminais: FrozenSet[str] = frozenset({STATUS_AUTORIZADO}),
    ):
        self.transaction_id = transaction_id
        self.status = status
        self.interval = interval
        self.status_terminais = status_terminais
        self._fetch = fetch
        self._on_status_change = on_status_change
        self._on_authorized = on_authorized
        self._notificado = status == STATUS_AUTORIZADO
        self._lock = asyncio.Lock()
        self._task: Optional[asyncio.Task] = None
        self.checking = False

    @property
    def terminal(self) -> bool:
        return self.status in self.status_terminais

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def refresh(self) -> str:
        """
        Consulta o status uma vez e aplica a mudança, se houver.
        Falhas são registradas e ignoradas.

        Returns:
            O status atual, depois da consulta
        """
        async with self._lock:
            if self.terminal:
                return self.status

            self.checking = True
            try:
                novo_status = _status_de(await self._fetch(self.transaction_id))
            except TransientPollError as e:
                logger.warning(f"Falha ao verificar status de {self.transaction_id}: {e}")
                return self.status
            except Exception as e:
                logger.error(f"Erro ao verificar status de {self.transaction_id}: {e}")
                return self.status
            finally:
                self.checking = False

            if novo_status != self.status:
                anterior = self.status
                self.status = novo_status
                logger.info(f"🔄 Transação {self.transaction_id}: {anterior} → {novo_status}")
                try:
                    await _chamar(self._on_status_change, anterior, novo_status)
                except Exception as e:
                    logger.error(f"Erro no callback de mudança de status de {self.transaction_id}: {e}")

                if novo_status == STATUS_AUTORIZADO and not self._notificado:
                    self._notificado = True
                    logger.info(f"✅ Pagamento aprovado: {self.transaction_id}")
                    try:
                        await _chamar(self._on_authorized, self.transaction_id)
                    except Exception as e:
                        logger.error(f"Erro no callback de aprovação de {self.transaction_id}: {e}")

            return self.status

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            await self.refresh()

    def start(self) -> None:
        """Agenda o loop de consultas (idempotente)"""
        if self.running:
            return
        logger.info(f"Iniciando verificação de {self.transaction_id} a cada {self.interval}s")
        self._task = asyncio.get_running_loop().create_task(self._loop())

    async def stop(self) -> None:
        """
        Cancela o loop de consultas e espera ele terminar.
        Chamado de dentro de um callback do próprio loop, só cancela.
        """
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        if task is not asyncio.current_task():
            with contextlib.suppress(asyncio.CancelledError):
                await task
        logger.info(f"Verificação de {self.transaction_id} encerrada")

    async def __aenter__(self) -> "StatusPoller":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()
