"""Tests for the transaction request builder."""

from decimal import Decimal

import pytest

from checkout.core.exceptions import ValidationError
from checkout.services.transacao_builder import (
    CAMPOS_OBRIGATORIOS,
    email_provisorio,
    limpar_digitos,
    montar_transacao,
    tipo_documento,
)


class TestDocumento:
    """Document cleaning and CPF/CNPJ derivation."""

    def test_limpar_digitos(self) -> None:
        assert limpar_digitos("529.982.247-25") == "52998224725"
        assert limpar_digitos("(11) 98765-4321") == "11987654321"
        assert limpar_digitos(None) == ""

    @pytest.mark.parametrize(
        "documento,esperado",
        [
            ("1", "CPF"),
            ("52998224725", "CPF"),
            ("529982247251", "CNPJ"),
            ("11222333000181", "CNPJ"),
        ],
    )
    def test_tipo_por_quantidade_de_digitos(self, documento: str, esperado: str) -> None:
        assert tipo_documento(documento) == esperado

    def test_cnpj_com_mascara(self, pedido) -> None:
        pedido["customer"]["document"] = "11.222.333/0001-81"
        request = montar_transacao(pedido)
        assert request.customer.document == "11222333000181"
        assert request.customer.document_type == "CNPJ"

    @pytest.mark.parametrize("documento", ["", "   ", "...-", None])
    def test_documento_vazio_e_omitido(self, pedido, documento) -> None:
        pedido["customer"]["document"] = documento
        payload = montar_transacao(pedido).to_payload()
        assert "document" not in payload["customer"]
        assert "document_type" not in payload["customer"]

    def test_document_type_informado_e_ignorado(self, pedido) -> None:
        pedido["customer"]["document_type"] = "CNPJ"
        request = montar_transacao(pedido)
        assert request.customer.document_type == "CPF"


class TestCliente:
    def test_telefone_limpo(self, pedido) -> None:
        assert montar_transacao(pedido).customer.phone == "11987654321"

    def test_email_provisorio_pelo_telefone(self, pedido) -> None:
        assert montar_transacao(pedido).customer.email == "11987654321@temp.com"
        assert email_provisorio("(11) 98765-4321") == "11987654321@temp.com"

    def test_email_real_preservado(self, pedido) -> None:
        pedido["customer"]["email"] = "ana@email.com"
        assert montar_transacao(pedido).customer.email == "ana@email.com"


class TestItens:
    def test_ids_posicionais(self, pedido) -> None:
        pedido["items"] = [
            {"id": "x", "name": "A", "price": 10},
            {"id": "y", "name": "B", "price": 5},
            {"name": "C", "price": 1},
        ]
        ids = [item.id for item in montar_transacao(pedido).items]
        assert ids == ["item_1", "item_2", "item_3"]

    def test_titulo_e_descricao_com_fallback(self, pedido) -> None:
        pedido["items"] = [
            {"name": "Combo", "price": 32.9},
            {"title": "Doces", "description": "Fini", "price": 1},
            {"price": 2},
        ]
        itens = montar_transacao(pedido).items
        assert (itens[0].title, itens[0].description) == ("Combo", "Combo")
        assert (itens[1].title, itens[1].description) == ("Doces", "Fini")
        assert (itens[2].title, itens[2].description) == ("Item 3", "Descrição do item 3")

    def test_quantidade_padrao_e_nao_fisico(self, pedido) -> None:
        item = montar_transacao(pedido).items[0]
        assert item.quantity == 1
        assert item.is_physical is False

    def test_preco_invalido(self, pedido) -> None:
        pedido["items"].append({"name": "Brinde", "price": 0})
        with pytest.raises(ValidationError) as exc:
            montar_transacao(pedido)
        assert exc.value.campo == "items.1.price"
        assert exc.value.status_code == 400


class TestCamposObrigatorios:
    @pytest.mark.parametrize("campo", CAMPOS_OBRIGATORIOS)
    def test_campo_ausente(self, pedido, campo: str) -> None:
        del pedido[campo]
        with pytest.raises(ValidationError) as exc:
            montar_transacao(pedido)
        assert str(exc.value) == f"Campo obrigatório: {campo}"
        assert exc.value.campo == campo

    def test_corpo_que_nao_e_objeto(self) -> None:
        with pytest.raises(ValidationError, match="external_id"):
            montar_transacao(["nao", "e", "objeto"])

    def test_total_negativo(self, pedido) -> None:
        pedido["total_amount"] = -1
        with pytest.raises(ValidationError, match="total_amount"):
            montar_transacao(pedido)


class TestPayload:
    def test_metodo_sempre_pix(self, pedido) -> None:
        assert montar_transacao(pedido).to_payload()["payment_method"] == "PIX"

    def test_valores_como_numero(self, pedido) -> None:
        payload = montar_transacao(pedido).to_payload()
        assert payload["total_amount"] == 32.9
        assert payload["items"][0]["price"] == 32.9

    def test_ip_padrao(self, pedido) -> None:
        assert montar_transacao(pedido).ip == "127.0.0.1"
        assert montar_transacao(pedido, ip="200.1.2.3").ip == "200.1.2.3"

    def test_cenario_ana(self) -> None:
        request = montar_transacao({
            "external_id": "burgl_1",
            "total_amount": 32.90,
            "payment_method": "pix",
            "webhook_url": "https://loja.test/api/webhook",
            "customer": {"name": "Ana", "phone": "11987654321", "document": "52998224725"},
            "items": [{"name": "Combo Burgl", "quantity": 1, "price": 32.90}],
        })
        assert request.total_amount == Decimal("32.90")
        assert request.customer.document == "52998224725"
        assert request.customer.document_type == "CPF"
