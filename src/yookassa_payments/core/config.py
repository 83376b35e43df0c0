"""
Configuration objects and helpers for the YooKassa client.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from .environment import build_environment
from .exceptions import ConfigError

__all__ = [
    "DEFAULT_API_URL",
    "ClientConfig",
    "ClientParameters",
    "ConfigError",
    "load_client_config",
]

DEFAULT_API_URL = "https://api.yookassa.ru/v3"

_PARAMETER_TO_ENV_KEY = {
    "shop_id": "YOOKASSA_SHOP_ID",
    "secret_key": "YOOKASSA_SECRET_KEY",
    "api_url": "YOOKASSA_API_URL",
    "timeout_seconds": "YOOKASSA_TIMEOUT_SECONDS",
}


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class ClientParameters:
    """
    Explicit parameter bundle for constructing :class:`ClientConfig`.

    Equivalent to passing the same keyword arguments to
    :func:`load_client_config`; explicit keywords win when both are given.
    """

    shop_id: Optional[str] = None
    secret_key: Optional[str] = None
    api_url: Optional[str] = None
    timeout_seconds: Optional[float | int | str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = _stringify(value)
        return overrides


def _collect_parameter_overrides(
    parameters: Optional[ClientParameters],
    explicit: Mapping[str, Any],
) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if parameters is not None:
        overrides.update(parameters.as_overrides())

    for key, value in explicit.items():
        if value is None:
            continue
        overrides[_PARAMETER_TO_ENV_KEY[key]] = _stringify(value)
    return overrides


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigError(
            f"YOOKASSA_TIMEOUT_SECONDS must be a number, got '{raw}'"
        ) from exc
    if timeout <= 0:
        raise ConfigError("YOOKASSA_TIMEOUT_SECONDS must be greater than zero")
    return timeout


def _clean(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    value = raw.strip()
    return value or None


@dataclass(frozen=True)
class ClientConfig:
    """
    Connection settings for the payment API.

    ``shop_id`` and ``secret_key`` may be absent here; :meth:`credentials`
    refuses to hand them out, so the first request fails before touching the
    network.
    """

    api_url: str = DEFAULT_API_URL
    shop_id: Optional[str] = None
    secret_key: Optional[str] = None
    timeout_seconds: Optional[float] = None

    def __repr__(self) -> str:
        secret = "***" if self.secret_key else None
        return (
            f"ClientConfig(api_url={self.api_url!r}, shop_id={self.shop_id!r}, "
            f"secret_key={secret!r}, timeout_seconds={self.timeout_seconds!r})"
        )

    def credentials(self) -> Tuple[str, str]:
        missing = [
            env_key
            for env_key, value in (
                ("YOOKASSA_SHOP_ID", self.shop_id),
                ("YOOKASSA_SECRET_KEY", self.secret_key),
            )
            if not value
        ]
        if missing:
            raise ConfigError(f"{' and '.join(missing)} must be provided")
        return self.shop_id, self.secret_key  # type: ignore[return-value]

    def url_for(self, path: str) -> str:
        return f"{self.api_url}/{path.lstrip('/')}"

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "ClientConfig":
        api_url = (_clean(values.get("YOOKASSA_API_URL")) or DEFAULT_API_URL).rstrip("/")
        if not api_url:
            raise ConfigError("YOOKASSA_API_URL must not be empty")

        return cls(
            api_url=api_url,
            shop_id=_clean(values.get("YOOKASSA_SHOP_ID")),
            secret_key=_clean(values.get("YOOKASSA_SECRET_KEY")),
            timeout_seconds=_parse_timeout(values.get("YOOKASSA_TIMEOUT_SECONDS")),
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[ClientParameters] = None,
        shop_id: Optional[str] = None,
        secret_key: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout_seconds: Optional[float | int | str] = None,
    ) -> "ClientConfig":
        parameter_overrides = _collect_parameter_overrides(
            parameters,
            {
                "shop_id": shop_id,
                "secret_key": secret_key,
                "api_url": api_url,
                "timeout_seconds": timeout_seconds,
            },
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables)


def load_client_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    shop_id: Optional[str] = None,
    secret_key: Optional[str] = None,
    api_url: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
) -> ClientConfig:
    """
    Convenience wrapper that mirrors :meth:`ClientConfig.from_env`.

    Sources are layered: the process environment, then the ``.env`` file for
    keys the environment does not define, then ``overrides``, then explicit
    keyword arguments.
    """
    return ClientConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        shop_id=shop_id,
        secret_key=secret_key,
        api_url=api_url,
        timeout_seconds=timeout_seconds,
    )
