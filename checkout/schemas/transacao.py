from pydantic import BaseModel, ConfigDict, Field, field_serializer
from decimal import Decimal
from typing import Any, Dict, List, Literal, Optional


STATUS_PENDENTE = "PENDING"
STATUS_AUTORIZADO = "AUTHORIZED"
STATUS_FALHOU = "FAILED"
STATUS_CHARGEBACK = "CHARGEBACK"


class Customer(BaseModel):
    """
    Cliente enviado à LiraPay.
    document/document_type andam juntos e são omitidos quando vazios.
    """
    name: str
    email: str
    phone: str
    document: Optional[str] = None
    document_type: Optional[Literal["CPF", "CNPJ"]] = None


class Item(BaseModel):
    id: str
    title: str
    description: str
    quantity: int = Field(ge=1)
    price: Decimal = Field(gt=0)
    is_physical: bool = False

    @field_serializer("price")
    def serializar_preco(self, price: Decimal) -> float:
        return float(price)


class TransactionRequest(BaseModel):
    """
    Requisição de criação de transação no formato da LiraPay
    """
    external_id: str
    total_amount: Decimal = Field(gt=0)
    payment_method: Literal["PIX"] = "PIX"
    webhook_url: str
    ip: str = "127.0.0.1"
    customer: Customer
    items: List[Item] = Field(min_length=1)

    @field_serializer("total_amount")
    def serializar_total(self, total_amount: Decimal) -> float:
        return float(total_amount)

    def to_payload(self) -> Dict[str, Any]:
        """Corpo JSON enviado para POST /v1/transactions"""
        return self.model_dump(mode="json", exclude_none=True)


class PixData(BaseModel):
    model_config = ConfigDict(extra="allow")

    payload: str


class Transaction(BaseModel):
    """
    Transação como o checkout a enxerga (QR Code e acompanhamento de status).
    A API repassa o JSON da LiraPay sem passar por este modelo.
    """
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str
    external_id: Optional[str] = None
    status: str
    total_value: Optional[Decimal] = None
    pix: Optional[PixData] = None
    customer: Optional[Dict[str, Any]] = None


class WebhookPayload(BaseModel):
    """
    Notificação enviada pela LiraPay quando o status muda
    Os campos não são tipados: qualquer objeto JSON é aceito e confirmado.
    """
    model_config = ConfigDict(extra="allow")

    id: Any = None
    external_id: Any = None
    status: Any = None
    total_amount: Any = None
    payment_method: Any = None
