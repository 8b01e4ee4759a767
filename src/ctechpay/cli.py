"""
Command-line interface for creating a CTechPay card order.
"""

from __future__ import annotations

import argparse
import logging
import sys
import uuid
from typing import Iterable, NoReturn, Sequence, Tuple

from .api import create_client
from .core.config import load_client_config
from .core.errors import ConfigError, CTechPayError


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ctechpay",
        description="Create a single CTechPay card payment order",
    )
    parser.add_argument(
        "amount",
        help="Order amount as a decimal number (e.g. 1500.50)",
    )
    parser.add_argument(
        "--txn-id",
        default=None,
        help="Your own transaction reference (default: a random UUID)",
    )
    parser.add_argument(
        "--merchant",
        action="store_true",
        help="Send the redirect/cancel merchant attributes with the order",
    )
    parser.add_argument(
        "--sandbox",
        action="store_true",
        help="Use the sandbox endpoint regardless of CTECHPAY_SANDBOX",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing CTECHPAY_* settings (default: .env)",
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
    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        config = load_client_config(
            env_file=args.env_file,
            overrides=overrides,
            sandbox=True if args.sandbox else None,
        )
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    txn_id = args.txn_id or uuid.uuid4().hex
    try:
        with create_client(config=config) as client:
            order = client.initiate_card_order(txn_id, args.amount, args.merchant)
    except ValueError as exc:
        # ConfigError is a ValueError too; both mean bad local input
        logging.error("Order not sent: %s", exc)
        return 1
    except CTechPayError as exc:
        logging.error("Order request failed: %s", exc)
        return 1

    logging.info("Order %s created for transaction %s", order.order_reference, order.txn_id)
    print(order.payment_page_url)
    return 0


def main() -> NoReturn:
    sys.exit(run_cli())
