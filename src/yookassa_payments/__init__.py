"""
Public facade for the YooKassa payments package.

Integrators can ``from yookassa_payments import ...`` everything they need
without navigating the package.
"""

from .api import create_payment_client, create_webhook_app
from .core import (
    DEFAULT_API_URL,
    Amount,
    ApiError,
    ApiResult,
    ClientConfig,
    ClientParameters,
    ConfigError,
    MappingError,
    Notification,
    Payment,
    PaymentClient,
    Refund,
    RemoteAPIError,
    TransportError,
    UnknownAPIError,
    VerificationError,
    YookassaError,
    load_client_config,
    load_env_file,
    verify_notification,
)

__all__ = (
    "DEFAULT_API_URL",
    "Amount",
    "ApiError",
    "ApiResult",
    "ClientConfig",
    "ClientParameters",
    "ConfigError",
    "MappingError",
    "Notification",
    "Payment",
    "PaymentClient",
    "Refund",
    "RemoteAPIError",
    "TransportError",
    "UnknownAPIError",
    "VerificationError",
    "YookassaError",
    "create_payment_client",
    "create_webhook_app",
    "load_client_config",
    "load_env_file",
    "verify_notification",
)
