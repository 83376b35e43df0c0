"""
HTTP client for the payment and refund endpoints.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Dict, Generic, Mapping, Optional, TypeVar

import requests

from .config import ClientConfig
from .exceptions import (
    ConfigError,
    MappingError,
    RemoteAPIError,
    TransportError,
    UnknownAPIError,
)
from .models import Amount, Payment, Refund
from .payloads import (
    build_cancel_request,
    build_capture_request,
    build_payment_request,
    build_refund_request,
)
from .transport import Transport

__all__ = [
    "ApiError",
    "ApiResult",
    "PaymentClient",
]

T = TypeVar("T")

UNKNOWN_REASON = "unknown"


@dataclass(frozen=True)
class ApiError:
    """
    Normalized failure of a client call.

    ``status`` is set when the API answered with something other than 200, in
    which case ``reason`` is the decoded error body. Otherwise ``reason`` is
    ``"unknown"`` and ``details`` describes what went wrong.
    """

    reason: Any
    status: Optional[int] = None
    details: Optional[str] = None

    @classmethod
    def from_response(cls, response: requests.Response) -> "ApiError":
        return cls(status=response.status_code, reason=_decode_error_body(response))

    @classmethod
    def unknown(cls, details: Any) -> "ApiError":
        return cls(reason=UNKNOWN_REASON, details=str(details))

    def as_dict(self) -> Dict[str, Any]:
        if self.status is not None:
            return {"status": self.status, "reason": self.reason}
        return {"reason": self.reason, "details": self.details}

    def to_exception(self) -> Exception:
        if self.status is not None:
            return RemoteAPIError(self.status, self.reason)
        return UnknownAPIError(self.details)


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[ApiError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising :class:`RemoteAPIError` / :class:`UnknownAPIError` on failure."""
        if self.error is not None:
            raise self.error.to_exception()
        return self.value  # type: ignore[return-value]


def _decode_error_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _handle(
    send: Callable[[], requests.Response],
    parse: Callable[[Any], T],
    operation: str,
) -> ApiResult[T]:
    try:
        response = send()
        if response.status_code != 200:
            error = ApiError.from_response(response)
            logging.warning(
                "%s rejected with %s: %s", operation, error.status, error.reason
            )
            return ApiResult(error=error)
        return ApiResult(value=parse(response.json()))
    except ConfigError:
        raise
    except (TransportError, MappingError, ValueError) as exc:
        logging.warning("%s failed: %s", operation, exc)
        return ApiResult(error=ApiError.unknown(exc))
    except Exception as exc:  # noqa: BLE001
        logging.exception("%s failed unexpectedly", operation)
        return ApiResult(error=ApiError.unknown(exc))


def _as_object(body: Any) -> Dict[str, Any]:
    if not isinstance(body, dict):
        raise ValueError(f"Expected a JSON object, got {type(body).__name__}")
    return body


class PaymentClient:
    """
    Thin wrapper around the payment and refund endpoints.

    Every method returns an :class:`ApiResult`; expected failures never raise.
    The exception is :class:`ConfigError`, raised before any request when the
    credentials are missing.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.transport = Transport(config, session=session)

    @property
    def session(self) -> requests.Session:
        return self.transport.session

    def _post(self, path: str, body: Dict[str, Any], operation: str) -> ApiResult[Dict[str, Any]]:
        return _handle(lambda: self.transport.post(path, body), _as_object, operation)

    def create_payment(
        self,
        value: Decimal | str | float | int,
        currency: str,
        return_url: str,
        description: str,
        /,
        **options: Any,
    ) -> ApiResult[Dict[str, Any]]:
        """
        Create a payment. Keyword ``options`` are merged into the request body
        and override the defaults (``capture=False`` creates a two-stage payment).
        """
        body = build_payment_request(value, currency, return_url, description, options)
        return self._post("/payments", body, "create_payment")

    def capture_payment(
        self,
        payment_id: str,
        amount: Optional[Amount | Mapping[str, Any]] = None,
    ) -> ApiResult[Dict[str, Any]]:
        body = build_capture_request(amount)
        return self._post(f"/payments/{payment_id}/capture", body, "capture_payment")

    def cancel_payment(self, payment_id: str) -> ApiResult[Dict[str, Any]]:
        return self._post(
            f"/payments/{payment_id}/cancel", build_cancel_request(), "cancel_payment"
        )

    def create_refund(
        self,
        payment_id: str,
        value: Decimal | str | float | int,
        currency: str,
    ) -> ApiResult[Dict[str, Any]]:
        body = build_refund_request(payment_id, value, currency)
        return self._post("/refunds", body, "create_refund")

    def get_payment_info(self, payment_id: str) -> ApiResult[Payment]:
        return _handle(
            lambda: self.transport.get(f"/payments/{payment_id}"),
            Payment.from_mapping,
            "get_payment_info",
        )

    def get_refund_info(self, refund_id: str) -> ApiResult[Refund]:
        return _handle(
            lambda: self.transport.get(f"/refunds/{refund_id}"),
            Refund.from_mapping,
            "get_refund_info",
        )
