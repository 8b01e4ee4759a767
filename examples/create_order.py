"""
Minimal script that uses the public API to create a CTechPay card order.
"""

from __future__ import annotations

import argparse
import logging
import sys
import uuid

from ctechpay import CTechPayError, ConfigError, create_client, load_client_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a CTechPay order using the SDK API")
    parser.add_argument("amount", help="Order amount, e.g. 1500.50")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing CTECHPAY_* settings",
    )
    parser.add_argument(
        "--api-token",
        help="Provide the merchant token without relying on environment data",
    )
    parser.add_argument(
        "--redirect-url",
        help="Where the customer lands after paying (enables merchant attributes)",
    )
    parser.add_argument(
        "--cancel-url",
        help="Where the customer lands after cancelling",
    )
    parser.add_argument(
        "--cancel-text",
        help="Label of the cancel link (default: Cancel Payment)",
    )
    parser.add_argument(
        "--sandbox",
        action="store_true",
        help="Use the sandbox endpoint",
    )
    parser.add_argument(
        "--log-level",
        default="DEBUG",
        help="Python logging level (default: DEBUG)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.DEBUG),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    try:
        config = load_client_config(
            env_file=args.env_file,
            api_token=args.api_token,
            sandbox=True if args.sandbox else None,
            redirect_url=args.redirect_url,
            cancel_url=args.cancel_url,
            cancel_text=args.cancel_text,
        )
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    merchant = bool(config.redirect_url or config.cancel_url)
    try:
        with create_client(config=config) as client:
            order = client.initiate_card_order(uuid.uuid4().hex, args.amount, merchant)
    except ValueError as exc:
        logging.error("Order not sent: %s", exc)
        return 1
    except CTechPayError as exc:
        logging.error("Order failed: %s", exc)
        return 1

    logging.info("Order reference: %s", order.order_reference)
    logging.info("Send the customer to: %s", order.payment_page_url)
    return 0


if __name__ == "__main__":
    sys.exit(main())
