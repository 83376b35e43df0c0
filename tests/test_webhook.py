import logging

import pytest
from fastapi.testclient import TestClient

from conftest import payment_payload, refund_payload
from yookassa_payments import Notification, VerificationError, create_webhook_app, verify_notification
from yookassa_payments.core.webhook import (
    FETCH_FAILED,
    INVALID_FORMAT,
    STATUS_MISMATCH,
    UNKNOWN_EVENT,
    parse_notification,
)


def notification(event: str, object_id: str = "p-1", **snapshot) -> dict:
    return {"type": "notification", "event": event, "object": {"id": object_id, **snapshot}}


@pytest.fixture
def http(client):
    return TestClient(create_webhook_app(client=client))


def test_parse_notification_splits_event():
    parsed = parse_notification(notification("payment.waiting_for_capture"))
    assert parsed == Notification(
        event="payment.waiting_for_capture",
        object_id="p-1",
        category="payment",
        claimed_status="waiting_for_capture",
    )


@pytest.mark.parametrize(
    "body",
    [
        {},
        [],
        {"event": "payment.succeeded"},
        {"event": "payment.succeeded", "object": {}},
        {"event": "payment.succeeded", "object": {"id": 42}},
        {"event": 1, "object": {"id": "p-1"}},
        {"object": {"id": "p-1"}},
    ],
)
def test_parse_notification_rejects_malformed_bodies(body):
    with pytest.raises(VerificationError) as excinfo:
        parse_notification(body)
    assert excinfo.value.reason == INVALID_FORMAT


@pytest.mark.parametrize("event", ["payout.succeeded", "deal.closed", "payment", "payment.a.b"])
def test_parse_notification_rejects_unknown_events(event):
    with pytest.raises(VerificationError) as excinfo:
        parse_notification(notification(event))
    assert excinfo.value.reason == UNKNOWN_EVENT


def test_verify_payment_notification(client, session):
    session.queue(200, payment_payload(id="p-1", status="succeeded"))

    verified = verify_notification(client, notification("payment.succeeded"))

    assert verified.object_id == "p-1"
    assert session.calls[0]["url"].endswith("/payments/p-1")


def test_verify_refund_notification_uses_refund_endpoint(client, session):
    session.queue(200, refund_payload(id="r-1", status="succeeded"))

    verify_notification(client, notification("refund.succeeded", "r-1"))

    assert session.calls[0]["url"].endswith("/refunds/r-1")


def test_verify_ignores_embedded_status(client, session):
    session.queue(200, payment_payload(status="pending"))

    with pytest.raises(VerificationError) as excinfo:
        verify_notification(client, notification("payment.succeeded", status="succeeded"))
    assert excinfo.value.reason == STATUS_MISMATCH
    assert excinfo.value.details == "expected succeeded, got pending"


def test_verify_fetch_failure(client, session):
    session.queue(404, {"type": "error", "code": "not_found"})

    with pytest.raises(VerificationError) as excinfo:
        verify_notification(client, notification("payment.canceled"))
    assert excinfo.value.reason == FETCH_FAILED
    assert excinfo.value.details["status"] == 404


def test_endpoint_acknowledges_verified_notification(http, session):
    session.queue(200, payment_payload(id="p-1", status="succeeded"))

    response = http.post("/webhook", json=notification("payment.succeeded"))

    assert response.status_code == 200
    assert response.text == "OK"


def test_endpoint_accepts_object_with_non_canonical_amount(http, session):
    session.queue(200, payment_payload(status="succeeded", amount={"value": "10", "currency": "rub"}))

    response = http.post("/webhook", json=notification("payment.succeeded"))

    assert response.status_code == 200


def test_endpoint_rejects_status_mismatch(http, session):
    session.queue(200, payment_payload(status="canceled"))

    response = http.post("/webhook", json=notification("payment.succeeded"))

    assert response.status_code == 400
    assert response.text == "Verification Failed"


def test_endpoint_rejects_refund_fetch_failure(http, session):
    session.queue(500, {"type": "error"})

    response = http.post("/webhook", json=notification("refund.succeeded", "r-1"))

    assert response.status_code == 400


def test_endpoint_rejects_unknown_category_without_calling_api(http, session):
    response = http.post("/webhook", json=notification("payout.succeeded"))

    assert response.status_code == 400
    assert session.calls == []


@pytest.mark.parametrize("body", [{"event": "payment.succeeded"}, {"object": {"id": "p-1"}}])
def test_endpoint_rejects_malformed_body_without_calling_api(http, session, body):
    response = http.post("/webhook", json=body)

    assert response.status_code == 400
    assert response.text == "Invalid Format"
    assert session.calls == []


def test_endpoint_rejects_invalid_json(http, session):
    response = http.post(
        "/webhook", content=b"{not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert session.calls == []


@pytest.mark.parametrize(
    "method, path",
    [("POST", "/"), ("POST", "/notifications"), ("GET", "/webhook"), ("PUT", "/webhook/extra")],
)
def test_unknown_routes_return_404(http, session, method, path):
    response = http.request(method, path, json=notification("payment.succeeded"))

    assert response.status_code == 404
    assert session.calls == []


def test_custom_webhook_path(client, session):
    session.queue(200, payment_payload(status="succeeded"))
    http = TestClient(create_webhook_app(client=client, path="/yookassa/notifications"))

    assert http.post("/yookassa/notifications", json=notification("payment.succeeded")).status_code == 200
    assert http.post("/webhook", json=notification("payment.succeeded")).status_code == 404


def test_endpoint_logs_acceptance_once(http, session, caplog):
    session.queue(200, payment_payload(status="succeeded"))

    with caplog.at_level(logging.INFO):
        http.post("/webhook", json=notification("payment.succeeded"))

    verified = [record for record in caplog.records if "verified" in record.getMessage().lower()]
    assert len(verified) == 1
