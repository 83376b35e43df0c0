"""
Minimal script that walks a two-stage payment through the public API:
authorize, wait for the payer, then capture or cancel.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time

from yookassa_payments import Amount, ConfigError, create_payment_client, load_client_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Authorize and capture a payment using the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing YOOKASSA_* settings",
    )
    parser.add_argument("--amount", default="100.00", help="Amount to authorize (default: 100.00)")
    parser.add_argument("--currency", default="RUB", help="Currency code (default: RUB)")
    parser.add_argument(
        "--capture-amount",
        help="Capture only part of the authorized amount",
    )
    parser.add_argument(
        "--return-url",
        default="https://example.com/thanks",
        help="Where the payer is sent after confirming",
    )
    parser.add_argument(
        "--cancel",
        action="store_true",
        help="Release the hold instead of capturing",
    )
    parser.add_argument(
        "--poll-seconds",
        type=int,
        default=5,
        help="Delay between status checks while waiting for the payer",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_client_config(env_file=args.env_file)
        config.credentials()
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_payment_client(config=config)

    created = client.create_payment(
        args.amount, args.currency, args.return_url, "Two-stage example", capture=False
    )
    if not created.ok:
        logging.error("Payment creation failed: %s", created.error.as_dict())
        return 1

    payment_id = created.value["id"]
    confirmation_url = (created.value.get("confirmation") or {}).get("confirmation_url")
    logging.info("Payment %s created; ask the payer to open %s", payment_id, confirmation_url)

    while True:
        info = client.get_payment_info(payment_id)
        if not info.ok:
            logging.error("Status check failed: %s", info.error.as_dict())
            return 1
        if info.value.status != "pending":
            break
        time.sleep(args.poll_seconds)

    if info.value.status != "waiting_for_capture":
        logging.error("Payment ended up %s; nothing to capture", info.value.status)
        return 1

    if args.cancel:
        result = client.cancel_payment(payment_id)
    else:
        amount = Amount.of(args.capture_amount, args.currency) if args.capture_amount else None
        result = client.capture_payment(payment_id, amount)

    if not result.ok:
        logging.error("Request failed: %s", result.error.as_dict())
        return 1

    logging.info("Payment %s is now %s", payment_id, result.value.get("status"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
