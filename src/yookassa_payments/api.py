"""
Public, high-level helpers for wiring up the client and the webhook endpoint.
"""

from __future__ import annotations

from typing import Mapping, Optional

import requests
from fastapi import FastAPI

from .core.client import PaymentClient
from .core.config import ClientConfig, ClientParameters, load_client_config
from .server import DEFAULT_WEBHOOK_PATH
from .server import create_webhook_app as _create_webhook_app

__all__ = [
    "create_payment_client",
    "create_webhook_app",
]


def _resolve_config(
    config: Optional[ClientConfig],
    *,
    env_file: Optional[str],
    overrides: Optional[Mapping[str, str]],
    base: Optional[Mapping[str, str]],
    parameters: Optional[ClientParameters],
    shop_id: Optional[str],
    secret_key: Optional[str],
    api_url: Optional[str],
    timeout_seconds: Optional[float | int | str],
) -> ClientConfig:
    if config is not None:
        extras = (overrides, base, parameters, shop_id, secret_key, api_url, timeout_seconds)
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built ClientConfig or individual parameters, not both."
            )
        return config
    return load_client_config(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        shop_id=shop_id,
        secret_key=secret_key,
        api_url=api_url,
        timeout_seconds=timeout_seconds,
    )


def create_payment_client(
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    shop_id: Optional[str] = None,
    secret_key: Optional[str] = None,
    api_url: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
) -> PaymentClient:
    """
    Construct a :class:`PaymentClient`.

    Callers can either supply a ready-made :class:`ClientConfig` or let the
    helper assemble one from the environment, a ``.env`` file and keyword
    arguments.
    """
    cfg = _resolve_config(
        config,
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        shop_id=shop_id,
        secret_key=secret_key,
        api_url=api_url,
        timeout_seconds=timeout_seconds,
    )
    return PaymentClient(cfg, session=session)


def create_webhook_app(
    *,
    client: Optional[PaymentClient] = None,
    path: str = DEFAULT_WEBHOOK_PATH,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    shop_id: Optional[str] = None,
    secret_key: Optional[str] = None,
    api_url: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
) -> FastAPI:
    """
    Build the FastAPI application that verifies notifications on ``path``.

    Reuses ``client`` when given, otherwise builds one the same way as
    :func:`create_payment_client`.
    """
    if client is None:
        client = create_payment_client(
            config=config,
            session=session,
            env_file=env_file,
            overrides=overrides,
            base=base,
            parameters=parameters,
            shop_id=shop_id,
            secret_key=secret_key,
            api_url=api_url,
            timeout_seconds=timeout_seconds,
        )
    return _create_webhook_app(client, path=path)
