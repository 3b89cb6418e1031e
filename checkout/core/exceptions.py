"""
Hierarquia de erros do checkout.

Todo erro de servidor vira o mesmo corpo JSON: {hasError: true, message}.
"""

from typing import Any, Dict, Optional


class CheckoutError(Exception):
    """Erro base do checkout."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    def to_response(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"hasError": True, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ConfigurationError(CheckoutError):
    """Credencial ou configuração obrigatória ausente."""

    status_code = 500


class ValidationError(CheckoutError):
    """Campo obrigatório ausente ou inválido no pedido."""

    status_code = 400

    def __init__(self, message: str, campo: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.campo = campo


class ProviderTimeoutError(CheckoutError):
    """A chamada à LiraPay passou do tempo limite."""

    status_code = 408


class ProviderError(CheckoutError):
    """Resposta de erro da LiraPay (status repassado)."""

    status_code = 400


class TransientPollError(CheckoutError):
    """Falha em uma consulta de status. Só é registrada em log."""
