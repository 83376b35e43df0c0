from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import pytest
import requests

from yookassa_payments import ClientConfig, PaymentClient

API_URL = "https://api.example.com/v3"


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    def json(self) -> Any:
        if self._payload is None:
            raise requests.exceptions.JSONDecodeError("Expecting value", self.text, 0)
        return self._payload


class FakeSession:
    """Records outbound calls and answers them from a queue of responses."""

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.responses: List[Any] = []

    def queue(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None) -> None:
        self.responses.append(FakeResponse(status_code, payload, text))

    def fail_with(self, exc: Exception) -> None:
        self.responses.append(exc)

    def _answer(self, call: Dict[str, Any]) -> FakeResponse:
        self.calls.append(call)
        answer = self.responses.pop(0) if self.responses else FakeResponse(200, {})
        if isinstance(answer, Exception):
            raise answer
        return answer

    def post(self, url, json=None, headers=None, auth=None, timeout=None):
        return self._answer(
            {"method": "POST", "url": url, "json": json, "headers": headers or {}, "auth": auth, "timeout": timeout}
        )

    def get(self, url, auth=None, timeout=None):
        return self._answer(
            {"method": "GET", "url": url, "json": None, "headers": {}, "auth": auth, "timeout": timeout}
        )


def payment_payload(**fields: Any) -> Dict[str, Any]:
    payload = {
        "id": "2d8d3c57-000f-5000-8000-1a1b2c3d4e5f",
        "status": "succeeded",
        "amount": {"value": "199.50", "currency": "RUB"},
        "paid": True,
        "created_at": "2024-05-01T10:15:30.123Z",
        "description": "Order 72",
        "confirmation": {"type": "redirect", "confirmation_url": "https://pay.example.com/c/1"},
        "test": True,
        "refunded_amount": {"value": "0.00", "currency": "RUB"},
        "receipt_registration": "succeeded",
        "metadata": {"order_id": "72"},
    }
    payload.update(fields)
    return payload


def refund_payload(**fields: Any) -> Dict[str, Any]:
    payload = {
        "id": "216749f7-0016-50be-b000-078d43a63ae4",
        "status": "succeeded",
        "amount": {"value": "50.00", "currency": "RUB"},
        "payment_id": "2d8d3c57-000f-5000-8000-1a1b2c3d4e5f",
        "created_at": "2024-05-02T08:00:00.000Z",
    }
    payload.update(fields)
    return payload


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(api_url=API_URL, shop_id="123456", secret_key="test_secret")


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(config: ClientConfig, session: FakeSession) -> PaymentClient:
    return PaymentClient(config, session=session)
