"""
Normalização do pedido recebido do checkout para o formato da LiraPay
"""

from typing import Any, Dict, List, Optional
from pydantic import ValidationError as PydanticValidationError
from checkout.core.exceptions import ValidationError
from checkout.schemas.transacao import Customer, Item, TransactionRequest
import logging
import re

logger = logging.getLogger(__name__)


CAMPOS_OBRIGATORIOS = (
    "external_id",
    "total_amount",
    "payment_method",
    "webhook_url",
    "items",
    "customer",
)

IP_PADRAO = "127.0.0.1"


def limpar_digitos(valor: Any) -> str:
    """Remove tudo que não for dígito (máscaras de telefone, CPF, CNPJ)"""
    if valor is None:
        return ""
    return re.sub(r"\D", "", str(valor))


def tipo_documento(documento: str) -> str:
    """CPF até 11 dígitos, CNPJ acima disso"""
    return "CPF" if len(documento) <= 11 else "CNPJ"


def email_provisorio(telefone: Any) -> str:
    """
    O checkout não pede e-mail; a LiraPay exige um.
    Gera um endereço a partir do telefone.
    """
    return f"{limpar_digitos(telefone)}@temp.com"


def montar_cliente(dados: Dict[str, Any]) -> Customer:
    """
    Monta o cliente com telefone e documento limpos.
    document_type é sempre derivado do documento, nunca aceito do chamador.
    """
    telefone = limpar_digitos(dados.get("phone"))

    cliente = {
        "name": dados.get("name"),
        "email": dados.get("email") or email_provisorio(telefone),
        "phone": telefone,
    }

    documento = limpar_digitos(dados.get("document"))
    if documento:
        cliente["document"] = documento
        cliente["document_type"] = tipo_documento(documento)

    try:
        return Customer(**cliente)
    except PydanticValidationError as e:
        raise _campo_invalido(e, "customer") from e


def montar_itens(itens: List[Dict[str, Any]]) -> List[Item]:
    """
    Uma entrada por linha do carrinho, com ids posicionais item_1, item_2, ...
    """
    resultado = []

    for posicao, item in enumerate(itens, start=1):
        nome = item.get("name") or item.get("title")

        try:
            resultado.append(Item(
                id=f"item_{posicao}",
                title=nome or f"Item {posicao}",
                description=item.get("description") or nome or f"Descrição do item {posicao}",
                quantity=item.get("quantity") or 1,
                price=item.get("price"),
                is_physical=False,
            ))
        except PydanticValidationError as e:
            raise _campo_invalido(e, f"items.{posicao - 1}") from e

    return resultado


def _campo_invalido(erro: PydanticValidationError, prefixo: Optional[str] = None) -> ValidationError:
    primeiro = erro.errors()[0]
    caminho = ".".join(str(parte) for parte in primeiro["loc"])
    if prefixo:
        caminho = f"{prefixo}.{caminho}" if caminho else prefixo
    return ValidationError(f"Campo inválido: {caminho}", campo=caminho)


def montar_transacao(body: Dict[str, Any], ip: Optional[str] = None) -> TransactionRequest:
    """
    Converte o corpo recebido em /api/create-transaction em TransactionRequest

    Args:
        body: Pedido enviado pelo checkout (tipagem solta)
        ip: IP do cliente, repassado à LiraPay

    Returns:
        Requisição pronta para POST /v1/transactions

    Raises:
        ValidationError: campo obrigatório ausente ou valor inválido
    """
    if not isinstance(body, dict):
        body = {}

    for campo in CAMPOS_OBRIGATORIOS:
        if not body.get(campo):
            logger.warning(f"Pedido sem campo obrigatório: {campo}")
            raise ValidationError(f"Campo obrigatório: {campo}", campo=campo)

    if not isinstance(body["customer"], dict):
        raise ValidationError("Campo inválido: customer", campo="customer")

    if not isinstance(body["items"], list) or not all(isinstance(i, dict) for i in body["items"]):
        raise ValidationError("Campo inválido: items", campo="items")

    cliente = montar_cliente(body["customer"])
    itens = montar_itens(body["items"])

    try:
        return TransactionRequest(
            external_id=str(body["external_id"]),
            total_amount=body["total_amount"],
            payment_method="PIX",
            webhook_url=body["webhook_url"],
            ip=ip or IP_PADRAO,
            customer=cliente,
            items=itens,
        )
    except PydanticValidationError as e:
        raise _campo_invalido(e) from e

