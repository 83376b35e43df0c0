"""
HTTP endpoint that receives webhook notifications.

Only ``POST <path>`` is served. A verified notification is acknowledged with
``200 OK``; anything that fails parsing or verification gets ``400`` so the
sender retries delivery. Every other route answers ``404``.
"""

from __future__ import annotations

import json
import logging

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse

from .core.client import PaymentClient
from .core.exceptions import VerificationError
from .core.webhook import INVALID_FORMAT, verify_notification

__all__ = ["DEFAULT_WEBHOOK_PATH", "create_webhook_app"]

DEFAULT_WEBHOOK_PATH = "/webhook"

_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def create_webhook_app(
    client: PaymentClient,
    *,
    path: str = DEFAULT_WEBHOOK_PATH,
) -> FastAPI:
    app = FastAPI(title="yookassa-payments webhook", docs_url=None, redoc_url=None, openapi_url=None)

    @app.post(path, response_class=PlainTextResponse)
    async def receive_notification(request: Request) -> PlainTextResponse:
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logging.warning("Rejected notification: body is not valid JSON")
            return PlainTextResponse("Invalid Format", status_code=400)

        try:
            # verification blocks on an outbound API call
            await run_in_threadpool(verify_notification, client, body)
        except VerificationError as exc:
            logging.warning("Rejected notification: %s", exc)
            if exc.reason == INVALID_FORMAT:
                return PlainTextResponse("Invalid Format", status_code=400)
            return PlainTextResponse("Verification Failed", status_code=400)
        return PlainTextResponse("OK", status_code=200)

    @app.api_route("/{unmatched:path}", methods=_ALL_METHODS, include_in_schema=False)
    async def not_found(unmatched: str) -> PlainTextResponse:
        return PlainTextResponse("Not Found", status_code=404)

    return app
