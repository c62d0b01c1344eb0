"""Shared fixtures: an app wired to a fake Shiprocket and a fake IP echo service."""

import asyncio
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from config import Settings

API_URL = "https://shiprocket.test"
IP_URL = "https://ip.test/?format=json"


class FakeUpstream:
    """Records outbound requests and answers with a configurable response."""

    def __init__(self):
        self.requests = []
        self.order_response = httpx.Response(200, json={"order_id": 987654, "status": "NEW"})
        self.ip_response = httpx.Response(200, json={"ip": "203.0.113.7"})
        self.error = None
        self.delay = 0

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if request.url.host == "ip.test":
            return self.ip_response
        return self.order_response

    @property
    def order_requests(self):
        return [r for r in self.requests if r.url.host == "shiprocket.test"]

    def last_order_body(self) -> dict:
        return json.loads(self.order_requests[-1].content)


@pytest.fixture
def settings():
    return Settings(
        SHIPROCKET_TOKEN="test-token",
        SHIPROCKET_API_URL=API_URL,
        SHIPROCKET_PICKUP_LOCATION="Warehouse-1",
        IP_LOOKUP_URL=IP_URL,
        LOG_DIR=None,
    )


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def client(settings, upstream):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    app = create_app(settings, http_client=http_client)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def checkout():
    """The worked example order: one book, two copies."""
    return {
        "orderId": "O1",
        "cart": [{"id": "B1", "name": "Book", "price": 100, "quantity": 2}],
        "formData": {
            "name": "A",
            "email": "a@x.com",
            "phone": "123",
            "address": "addr",
            "pincode": "110001",
            "state": "DL",
        },
        "totalAmount": 200,
        "paymentId": "P1",
    }
