"""
Public, high-level helpers for creating CTechPay orders.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Mapping, Optional

import requests

from .core.client import PaymentClient
from .core.config import ClientConfig, load_client_config
from .core.payloads import OrderResponse

__all__ = [
    "create_client",
    "initiate_card_order",
]


def create_client(
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    logger: Optional[logging.Logger] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    api_token: Optional[str] = None,
    sandbox: Optional[bool] = None,
    timeout_seconds: Optional[float | int | str] = None,
    redirect_url: Optional[str] = None,
    cancel_url: Optional[str] = None,
    cancel_text: Optional[str] = None,
) -> PaymentClient:
    """
    Construct a :class:`PaymentClient` with its merchant attributes applied.

    Callers can either supply a ready-made :class:`ClientConfig` or let the
    helper assemble one from environment data.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            api_token,
            sandbox,
            timeout_seconds,
            redirect_url,
            cancel_url,
            cancel_text,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built ClientConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_client_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            api_token=api_token,
            sandbox=sandbox,
            timeout_seconds=timeout_seconds,
            redirect_url=redirect_url,
            cancel_url=cancel_url,
            cancel_text=cancel_text,
        )

    client = PaymentClient(
        cfg.api_token,
        base_url=cfg.base_url,
        timeout=cfg.timeout_seconds,
        session=session,
        logger=logger,
        strict_urls=cfg.strict_urls,
    )
    if cfg.redirect_url:
        client.set_redirect_url(cfg.redirect_url)
    if cfg.cancel_url:
        client.set_cancel_url(cfg.cancel_url, cfg.cancel_text)
    return client


def initiate_card_order(
    txn_id: str,
    amount: Decimal | str | int | float,
    *,
    merchant: bool = False,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    logger: Optional[logging.Logger] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
) -> OrderResponse:
    """
    One-shot helper: build a client, create the order, release the client.
    """
    client = create_client(
        config=config,
        session=session,
        logger=logger,
        env_file=env_file,
        overrides=overrides,
    )
    with client:
        return client.initiate_card_order(txn_id, amount, merchant)
