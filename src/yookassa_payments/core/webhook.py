"""
Verification of inbound webhook notifications.

Notifications arrive unauthenticated on a public endpoint, so the embedded
object is never trusted: only ``event`` and ``object.id`` are read, and the
claimed status is confirmed by fetching the object from the API.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Union

from .client import ApiResult, PaymentClient
from .exceptions import VerificationError
from .models import Payment, Refund

__all__ = [
    "INVALID_FORMAT",
    "STATUS_MISMATCH",
    "FETCH_FAILED",
    "UNKNOWN_EVENT",
    "Notification",
    "parse_notification",
    "verify_notification",
]

INVALID_FORMAT = "Invalid notification format"
UNKNOWN_EVENT = "Unknown event type"
FETCH_FAILED = "Could not fetch object"
STATUS_MISMATCH = "Status mismatch"

_CATEGORIES = ("payment", "refund")


@dataclass(frozen=True)
class Notification:
    event: str
    object_id: str
    category: str
    claimed_status: str


def parse_notification(body: Any) -> Notification:
    """
    Extract the event and object id from a decoded notification body.

    Raises :class:`VerificationError` when the body is not shaped like
    ``{"event": str, "object": {"id": str}}`` or names an event category other
    than ``payment`` / ``refund``.
    """
    if not isinstance(body, dict):
        raise VerificationError(INVALID_FORMAT, "body is not a JSON object")
    event = body.get("event")
    obj = body.get("object")
    object_id = obj.get("id") if isinstance(obj, dict) else None
    if not isinstance(event, str) or not isinstance(object_id, str):
        raise VerificationError(INVALID_FORMAT, "expected 'event' and 'object.id' strings")

    parts = event.split(".")
    if len(parts) != 2 or parts[0] not in _CATEGORIES:
        raise VerificationError(UNKNOWN_EVENT, event)

    category, claimed_status = parts
    return Notification(
        event=event,
        object_id=object_id,
        category=category,
        claimed_status=claimed_status,
    )


def _fetch(client: PaymentClient, notification: Notification) -> ApiResult[Union[Payment, Refund]]:
    if notification.category == "payment":
        return client.get_payment_info(notification.object_id)
    return client.get_refund_info(notification.object_id)


def verify_notification(client: PaymentClient, body: Any) -> Notification:
    """
    Confirm a notification against the API.

    Returns the parsed :class:`Notification` when the object's current status
    matches the one claimed by the event; raises :class:`VerificationError`
    otherwise.
    """
    notification = parse_notification(body)

    result = _fetch(client, notification)
    if not result.ok:
        raise VerificationError(FETCH_FAILED, result.error.as_dict())

    actual = result.value.status
    if actual != notification.claimed_status:
        raise VerificationError(
            STATUS_MISMATCH,
            f"expected {notification.claimed_status}, got {actual}",
        )

    logging.info(
        "Notification verified: %s for %s", notification.event, notification.object_id
    )
    return notification
