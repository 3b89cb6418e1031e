"""Pytest configuration and fixtures."""

import json
from typing import Any, Callable, Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient

from checkout.api.deps import get_lirapay_client
from checkout.core.lirapay import LiraPayClient
from checkout.main import app

API_SECRET = "segredo-teste"
LIRAPAY_URL = "https://lirapay.test"


class FakeLiraPay:
    """Records outbound requests and answers with a configurable handler."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.responder: Callable[[httpx.Request], Any] = lambda request: httpx.Response(
            200, json=transacao_pendente()
        )

    def __call__(self, request: httpx.Request) -> Any:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


def transacao_pendente(**overrides: Any) -> Dict[str, Any]:
    data = {
        "id": "tx_1",
        "external_id": "checkout_1",
        "status": "PENDING",
        "total_value": 32.9,
        "pix": {"payload": "00020126580014br.gov.bcb.pix0136abc520400005303986540532.905802BR6304ABCD"},
    }
    data.update(overrides)
    return data


@pytest.fixture
def fake_lirapay() -> FakeLiraPay:
    return FakeLiraPay()


@pytest.fixture
def lirapay_client_factory(fake_lirapay: FakeLiraPay) -> Callable[..., LiraPayClient]:
    def _factory(timeout: float = 10.0) -> LiraPayClient:
        return LiraPayClient(
            api_secret=API_SECRET,
            base_url=LIRAPAY_URL,
            timeout=timeout,
            transport=httpx.MockTransport(fake_lirapay),
        )

    return _factory


@pytest.fixture
def api_client(lirapay_client_factory):
    """TestClient with the LiraPay dependency pointed at the fake."""

    async def _override():
        async with lirapay_client_factory() as client:
            yield client

    app.dependency_overrides[get_lirapay_client] = _override
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def pedido() -> Dict[str, Any]:
    """Order body as the storefront sends it."""
    return {
        "external_id": "checkout_1",
        "total_amount": 32.9,
        "payment_method": "pix",
        "webhook_url": "https://loja.test/api/webhook",
        "customer": {
            "name": "Ana",
            "phone": "(11) 98765-4321",
            "document": "529.982.247-25",
        },
        "items": [{"name": "Combo Burgl", "quantity": 1, "price": 32.9}],
    }
