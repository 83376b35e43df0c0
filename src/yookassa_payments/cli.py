"""
Command-line interface for exercising the payment API and running the
webhook endpoint.
"""

from __future__ import annotations

import argparse
import json
import logging
from typing import Any, Iterable, Sequence, Tuple

import requests
import uvicorn

from .api import create_payment_client, create_webhook_app
from .core.client import ApiResult, PaymentClient
from .core.config import ConfigError, load_client_config
from .core.models import Amount, Payment, Refund
from .server import DEFAULT_WEBHOOK_PATH


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _metadata_pair(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Metadata must look like KEY=VALUE")
    key, val = value.split("=", 1)
    return key.strip(), val


def _collect_pairs(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    collected: dict[str, str] = {}
    for key, value in pairs:
        collected[key] = value
    return collected


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yookassa-payments",
        description="Call the YooKassa payment API or serve the webhook endpoint",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing YOOKASSA_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    create = commands.add_parser("create-payment", help="Create a redirect payment")
    create.add_argument("value", help="Amount, e.g. 199.50")
    create.add_argument("currency", help="Three-letter currency code, e.g. RUB")
    create.add_argument("return_url", help="Where the payer lands after confirmation")
    create.add_argument("description", help="Description shown to the payer")
    create.add_argument(
        "--no-capture",
        action="store_true",
        help="Only authorize the amount (two-stage payment)",
    )
    create.add_argument(
        "--metadata",
        action="append",
        type=_metadata_pair,
        metavar="KEY=VALUE",
        default=None,
        help="Attach a metadata entry to the payment (repeatable)",
    )

    capture = commands.add_parser("capture", help="Capture an authorized payment")
    capture.add_argument("payment_id")
    capture.add_argument("--value", help="Capture only this amount (requires --currency)")
    capture.add_argument("--currency", help="Currency of the partial capture amount")

    cancel = commands.add_parser("cancel", help="Cancel an authorized payment")
    cancel.add_argument("payment_id")

    refund = commands.add_parser("refund", help="Refund a succeeded payment")
    refund.add_argument("payment_id")
    refund.add_argument("value")
    refund.add_argument("currency")

    payment_info = commands.add_parser("payment-info", help="Show a payment")
    payment_info.add_argument("payment_id")

    refund_info = commands.add_parser("refund-info", help="Show a refund")
    refund_info.add_argument("refund_id")

    serve = commands.add_parser("serve", help="Run the webhook endpoint")
    serve.add_argument("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    serve.add_argument("--port", type=int, default=4000, help="Bind port (default: 4000)")
    serve.add_argument(
        "--path",
        default=DEFAULT_WEBHOOK_PATH,
        help=f"Notification path (default: {DEFAULT_WEBHOOK_PATH})",
    )
    return parser


def _call(client: PaymentClient, args: argparse.Namespace) -> ApiResult[Any]:
    if args.command == "create-payment":
        options: dict[str, Any] = {}
        if args.no_capture:
            options["capture"] = False
        if args.metadata:
            options["metadata"] = _collect_pairs(args.metadata)
        return client.create_payment(
            args.value, args.currency, args.return_url, args.description, **options
        )
    if args.command == "capture":
        amount = None
        if args.value is not None or args.currency is not None:
            if args.value is None or args.currency is None:
                raise ValueError("--value and --currency must be given together")
            amount = Amount.of(args.value, args.currency)
        return client.capture_payment(args.payment_id, amount)
    if args.command == "cancel":
        return client.cancel_payment(args.payment_id)
    if args.command == "refund":
        return client.create_refund(args.payment_id, args.value, args.currency)
    if args.command == "payment-info":
        return client.get_payment_info(args.payment_id)
    return client.get_refund_info(args.refund_id)


def _render(value: Any) -> str:
    if isinstance(value, (Payment, Refund)):
        value = value.as_dict()
    return json.dumps(value, ensure_ascii=False, indent=2)


def _serve(client: PaymentClient, args: argparse.Namespace) -> int:
    try:
        client.config.credentials()
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1
    app = create_webhook_app(client=client, path=args.path)
    logging.info("Listening for notifications on %s:%s%s", args.host, args.port, args.path)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_pairs(args.set or ())

    try:
        config = load_client_config(env_file=args.env_file, overrides=overrides)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_payment_client(config=config, session=requests.Session())

    if args.command == "serve":
        return _serve(client, args)

    try:
        result = _call(client, args)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1
    except (TypeError, ValueError) as exc:
        logging.error("Invalid request: %s", exc)
        return 1

    if not result.ok:
        logging.error("Request failed: %s", result.error.as_dict())
        return 1

    print(_render(result.value))
    return 0


def main() -> None:
    raise SystemExit(run_cli())
