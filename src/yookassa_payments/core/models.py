"""
Typed snapshots of the objects returned by the payment API.

Records are immutable. Fields the API sends but this module does not know
about end up in ``extra`` so nothing returned by the API is lost.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional, Tuple

from .exceptions import MappingError

__all__ = [
    "PAYMENT_STATUSES",
    "REFUND_STATUSES",
    "Amount",
    "Payment",
    "Refund",
    "decimal_string",
]

PAYMENT_STATUSES = ("pending", "waiting_for_capture", "succeeded", "canceled")
REFUND_STATUSES = ("pending", "succeeded", "canceled")

_VALUE_RE = re.compile(r"^\d+(\.\d+)?$")
_CURRENCY_RE = re.compile(r"^[A-Z]{3}$")


def decimal_string(value: Decimal | str | float | int) -> str:
    """
    Render ``value`` the way the API expects amounts: a non-negative decimal
    string using ``.`` as the separator.
    """
    if isinstance(value, bool):
        raise TypeError("Amount value must be a number or a decimal string, not bool")
    if isinstance(value, str):
        text = value.strip()
        if "," in text:
            raise ValueError(f"Amount value '{value}' must use '.' as the decimal separator")
    elif isinstance(value, (int, float, Decimal)):
        text = repr(value) if isinstance(value, float) else str(value)
    else:
        raise TypeError(f"Unsupported amount value type: {type(value).__name__}")

    try:
        number = Decimal(text)
    except InvalidOperation as exc:
        raise ValueError(f"Amount value '{value}' is not a valid decimal number") from exc
    if not number.is_finite():
        raise ValueError(f"Amount value '{value}' must be finite")
    if number < 0:
        raise ValueError(f"Amount value '{value}' must not be negative")
    return format(number, "f")


@dataclass(frozen=True)
class Amount:
    value: str
    currency: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not _VALUE_RE.match(self.value):
            raise ValueError(
                f"Amount value must be a non-negative decimal string, got {self.value!r}"
            )
        if not isinstance(self.currency, str) or not _CURRENCY_RE.match(self.currency):
            raise ValueError(
                f"Currency must be a three-letter upper-case code, got {self.currency!r}"
            )

    @classmethod
    def of(cls, value: Decimal | str | float | int, currency: str) -> "Amount":
        return cls(value=decimal_string(value), currency=currency)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Amount":
        try:
            value, currency = data["value"], data["currency"]
        except (KeyError, TypeError) as exc:
            raise ValueError(
                f"Amount must be a mapping with 'value' and 'currency', got {data!r}"
            ) from exc
        return cls(value=str(value), currency=currency)

    def as_decimal(self) -> Decimal:
        return Decimal(self.value)

    def as_dict(self) -> Dict[str, str]:
        return {"value": self.value, "currency": self.currency}


def _split_fields(
    record: str,
    data: Mapping[str, Any],
    known: Tuple[str, ...],
    required: Tuple[str, ...],
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    if not isinstance(data, Mapping):
        raise MappingError(f"{record} must be a JSON object, got {type(data).__name__}")
    missing = tuple(name for name in required if name not in data)
    if missing:
        raise MappingError(
            f"{record} is missing required field(s): {', '.join(missing)}",
            missing=missing,
        )
    named = {key: value for key, value in data.items() if key in known}
    extra = {key: value for key, value in data.items() if key not in known}
    return named, extra


def _amount_field(raw: Any) -> Any:
    """Type a wire amount as :class:`Amount`; anything non-canonical is kept verbatim."""
    if raw is None:
        return None
    try:
        return Amount.from_mapping(raw)
    except ValueError:
        return raw


def _wire(value: Any) -> Any:
    return value.as_dict() if isinstance(value, Amount) else value


def _parse_timestamp(raw: Optional[str]) -> Optional[datetime]:
    if not raw:
        return None
    # fromisoformat() only accepts a trailing "Z" from 3.11 onwards
    return datetime.fromisoformat(raw.replace("Z", "+00:00"))


@dataclass(frozen=True)
class Payment:
    """Snapshot of a payment object (``GET /payments/{id}``)."""

    id: str
    status: str
    amount: Amount | Any
    paid: bool
    created_at: Optional[str] = None
    description: Optional[str] = None
    confirmation: Optional[Dict[str, Any]] = None
    test: Optional[bool] = None
    refunded_amount: Optional[Amount | Any] = None
    receipt_registration: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    _KNOWN = (
        "id",
        "status",
        "amount",
        "paid",
        "created_at",
        "description",
        "confirmation",
        "test",
        "refunded_amount",
        "receipt_registration",
        "metadata",
    )
    _REQUIRED = ("id", "status", "amount", "paid")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Payment":
        named, extra = _split_fields("Payment", data, cls._KNOWN, cls._REQUIRED)
        named["amount"] = _amount_field(named["amount"])
        named["refunded_amount"] = _amount_field(named.get("refunded_amount"))
        return cls(extra=extra, **named)

    @property
    def created(self) -> Optional[datetime]:
        return _parse_timestamp(self.created_at)

    @property
    def confirmation_url(self) -> Optional[str]:
        if not self.confirmation:
            return None
        return self.confirmation.get("confirmation_url")

    def as_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for name in self._KNOWN:
            value = getattr(self, name)
            if value is None:
                continue
            data[name] = _wire(value)
        data.update(self.extra)
        return data


@dataclass(frozen=True)
class Refund:
    """Snapshot of a refund object (``GET /refunds/{id}``)."""

    id: str
    status: str
    amount: Amount | Any
    payment_id: str
    created_at: str
    cancellation_details: Optional[Dict[str, Any]] = None
    refund_authorization_details: Optional[Dict[str, Any]] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    _KNOWN = (
        "id",
        "status",
        "amount",
        "payment_id",
        "created_at",
        "cancellation_details",
        "refund_authorization_details",
    )
    _REQUIRED = ("id", "status", "amount", "payment_id", "created_at")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Refund":
        named, extra = _split_fields("Refund", data, cls._KNOWN, cls._REQUIRED)
        named["amount"] = _amount_field(named["amount"])
        return cls(extra=extra, **named)

    @property
    def created(self) -> Optional[datetime]:
        return _parse_timestamp(self.created_at)

    def as_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for name in self._KNOWN:
            value = getattr(self, name)
            if value is None:
                continue
            data[name] = _wire(value)
        data.update(self.extra)
        return data
