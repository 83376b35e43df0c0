"""
Helpers for constructing the JSON bodies sent to the payment API.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Mapping, Optional

from .models import Amount, decimal_string

__all__ = [
    "build_amount",
    "build_cancel_request",
    "build_capture_request",
    "build_payment_request",
    "build_refund_request",
    "decimal_string",
]


def _jsonable(value: Any) -> Any:
    if isinstance(value, Amount):
        return value.as_dict()
    return value


def build_amount(value: Decimal | str | float | int, currency: str) -> Dict[str, str]:
    return Amount.of(value, currency).as_dict()


def build_payment_request(
    value: Decimal | str | float | int,
    currency: str,
    return_url: str,
    description: str,
    options: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Build the ``POST /payments`` body.

    Defaults describe a one-stage redirect payment. ``options`` are merged on
    top (shallow) and win on collision, e.g. ``capture=False`` for a two-stage
    payment or ``metadata={...}``.
    """
    body: Dict[str, Any] = {
        "amount": build_amount(value, currency),
        "confirmation": {"type": "redirect", "return_url": return_url},
        "description": description,
        "capture": True,
    }
    for key, option in (options or {}).items():
        body[key] = _jsonable(option)
    return body


def build_capture_request(
    amount: Optional[Amount | Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Build the ``POST /payments/{id}/capture`` body.

    Without ``amount`` the whole authorized sum is captured. A partial capture
    needs a complete amount (value and currency); bare numbers are refused
    because the currency would have to be guessed.
    """
    if amount is None:
        return {}
    if isinstance(amount, Amount):
        return {"amount": amount.as_dict()}
    if isinstance(amount, Mapping):
        if "value" not in amount or "currency" not in amount:
            raise ValueError("Capture amount must include both 'value' and 'currency'")
        return {"amount": dict(amount)}
    raise TypeError(
        "Capture amount must be an Amount or a {'value', 'currency'} mapping, "
        f"got {type(amount).__name__}"
    )


def build_cancel_request() -> Dict[str, Any]:
    return {}


def build_refund_request(
    payment_id: str,
    value: Decimal | str | float | int,
    currency: str,
) -> Dict[str, Any]:
    return {
        "amount": build_amount(value, currency),
        "payment_id": payment_id,
    }
