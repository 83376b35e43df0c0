"""
Authenticated HTTP transport for the payment API.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Optional

import requests

from .config import ClientConfig
from .exceptions import TransportError

__all__ = ["IDEMPOTENCE_HEADER", "Transport", "new_idempotence_key"]

IDEMPOTENCE_HEADER = "Idempotence-Key"


def new_idempotence_key() -> str:
    return str(uuid.uuid4())


class Transport:
    """
    Issues GET/POST requests against ``config.api_url`` with HTTP Basic auth.

    Non-2xx responses are returned as-is; only failures that prevent a
    response from arriving raise :class:`TransportError`.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()

    def post(self, path: str, body: Dict[str, Any]) -> requests.Response:
        auth = self.config.credentials()
        url = self.config.url_for(path)
        headers = {IDEMPOTENCE_HEADER: new_idempotence_key()}
        logging.info("POST %s", url)
        try:
            return self.session.post(
                url,
                json=body,
                headers=headers,
                auth=auth,
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as exc:
            logging.warning("POST %s failed: %s", url, exc)
            raise TransportError(f"POST {url} failed: {exc}") from exc

    def get(self, path: str) -> requests.Response:
        auth = self.config.credentials()
        url = self.config.url_for(path)
        logging.info("GET %s", url)
        try:
            return self.session.get(url, auth=auth, timeout=self.config.timeout_seconds)
        except requests.RequestException as exc:
            logging.warning("GET %s failed: %s", url, exc)
            raise TransportError(f"GET {url} failed: {exc}") from exc
