"""
Core primitives: configuration, transport, records, payloads, client and
webhook verification.
"""

from .client import ApiError, ApiResult, PaymentClient
from .config import (
    DEFAULT_API_URL,
    ClientConfig,
    ClientParameters,
    load_client_config,
)
from .environment import ClientEnvironment, build_environment, load_env_file
from .exceptions import (
    ConfigError,
    MappingError,
    RemoteAPIError,
    TransportError,
    UnknownAPIError,
    VerificationError,
    YookassaError,
)
from .models import Amount, Payment, Refund, decimal_string
from .payloads import (
    build_amount,
    build_cancel_request,
    build_capture_request,
    build_payment_request,
    build_refund_request,
)
from .transport import IDEMPOTENCE_HEADER, Transport
from .webhook import Notification, parse_notification, verify_notification

__all__ = [
    "DEFAULT_API_URL",
    "IDEMPOTENCE_HEADER",
    "Amount",
    "ApiError",
    "ApiResult",
    "ClientConfig",
    "ClientEnvironment",
    "ClientParameters",
    "ConfigError",
    "MappingError",
    "Notification",
    "Payment",
    "PaymentClient",
    "Refund",
    "RemoteAPIError",
    "Transport",
    "TransportError",
    "UnknownAPIError",
    "VerificationError",
    "YookassaError",
    "build_amount",
    "build_cancel_request",
    "build_capture_request",
    "build_environment",
    "build_payment_request",
    "build_refund_request",
    "decimal_string",
    "load_client_config",
    "load_env_file",
    "parse_notification",
    "verify_notification",
]
