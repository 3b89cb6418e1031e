from typing import Any, Dict, List
from decimal import Decimal
from datetime import datetime
from checkout.client import CheckoutApiClient
from checkout.core.exceptions import ValidationError
from checkout.schemas.pedido import CheckoutForm, Produto
from checkout.schemas.transacao import Transaction
from checkout.services.transacao_builder import email_provisorio, limpar_digitos, tipo_documento
import logging
import uuid

logger = logging.getLogger(__name__)


# Catálogo da loja
PRODUTO_PRINCIPAL = Produto(name="Combo Burgl", price=Decimal("32.90"))

ORDER_BUMPS = {
    "embalagem": Produto(name="Embalagem para Surpresa", price=Decimal("1.00")),
    "doces": Produto(name="Doces Fini e Sachês", price=Decimal("1.00")),
}

CAMPOS_OBRIGATORIOS = ("nome", "telefone", "cpf")


def validar_formulario(form: CheckoutForm) -> List[str]:
    """
    Retorna os campos com erro, na ordem do formulário.
    O primeiro é o que recebe o foco na tela.
    """
    erros = [campo for campo in CAMPOS_OBRIGATORIOS if not getattr(form, campo).strip()]

    if form.tem_endereco and not form.numero.strip():
        erros.append("numero")

    return erros


def gerar_external_id(prefixo: str = "checkout") -> str:
    """Id único do pedido: prefixo_<timestamp ms>_<9 caracteres>"""
    return f"{prefixo}_{int(datetime.now().timestamp() * 1000)}_{uuid.uuid4().hex[:9]}"


def itens_do_pedido(form: CheckoutForm) -> List[Produto]:
    """Produto principal mais os order bumps marcados"""
    itens = [PRODUTO_PRINCIPAL]
    for campo, produto in ORDER_BUMPS.items():
        if getattr(form, campo):
            itens.append(produto)
    return itens


def calcular_total(itens: List[Produto]) -> Decimal:
    return sum((item.price * item.quantity for item in itens), Decimal("0"))


def montar_pedido(form: CheckoutForm, webhook_url: str) -> Dict[str, Any]:
    """
    Monta o corpo de /api/create-transaction a partir do formulário

    Raises:
        ValidationError: campo obrigatório vazio (campo = primeiro com erro)
    """
    erros = validar_formulario(form)
    if erros:
        logger.warning(f"Formulário com campos obrigatórios vazios: {erros}")
        raise ValidationError(f"Campo obrigatório: {erros[0]}", campo=erros[0])

    telefone = limpar_digitos(form.telefone)
    cliente: Dict[str, Any] = {
        "name": form.nome.strip(),
        "email": email_provisorio(telefone),
        "phone": telefone,
    }

    documento = limpar_digitos(form.cpf)
    if documento:
        cliente["document"] = documento
        cliente["document_type"] = tipo_documento(documento)

    itens = itens_do_pedido(form)

    return {
        "external_id": gerar_external_id(),
        "total_amount": float(calcular_total(itens)),
        "payment_method": "pix",
        "webhook_url": webhook_url,
        "customer": cliente,
        "items": [
            {"name": item.name, "quantity": item.quantity, "price": float(item.price)}
            for item in itens
        ],
    }


async def finalizar_pedido(form: CheckoutForm, api: CheckoutApiClient, webhook_url: str) -> Transaction:
    """
    Fluxo do botão "Pagar": valida, monta o pedido e cria a transação PIX

    Raises:
        ValidationError: formulário incompleto (nada é enviado)
        ProviderError: a API recusou o pedido
    """
    pedido = montar_pedido(form, webhook_url)
    logger.info(f"Iniciando pagamento do pedido {pedido['external_id']} - Total: R$ {pedido['total_amount']:.2f}")
    return await api.criar_transacao(pedido)
