from pydantic import BaseModel
from decimal import Decimal
from typing import Optional


class CheckoutForm(BaseModel):
    """
    Dados preenchidos pelo cliente na tela de checkout
    """
    nome: str = ""
    telefone: str = ""
    cpf: str = ""

    # Endereço (preenchido pelo autocompletar de CEP)
    cep: str = ""
    rua: str = ""
    numero: str = ""
    bairro: str = ""
    cidade: str = ""
    tipo_endereco: str = "casa"

    # Order bumps
    embalagem: bool = False
    doces: bool = False

    class Config:
        json_schema_extra = {
            "example": {
                "nome": "Ana",
                "telefone": "(11) 98765-4321",
                "cpf": "529.982.247-25",
                "embalagem": True,
                "doces": False
            }
        }

    @property
    def tem_endereco(self) -> bool:
        """Os campos de endereço aparecem depois que o CEP é encontrado"""
        return bool(self.rua or self.bairro or self.cidade)


class Produto(BaseModel):
    """
    Linha do catálogo da loja
    """
    name: str
    price: Decimal
    quantity: int = 1
    description: Optional[str] = None
