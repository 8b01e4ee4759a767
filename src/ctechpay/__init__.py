"""
Public facade for the CTechPay client package.

The most useful pieces are re-exported here so integrators can
``from ctechpay import ...`` without navigating the package.
"""

import logging

from .api import create_client, initiate_card_order
from .core import (
    DEFAULT_CANCEL_TEXT,
    PRODUCTION_URL,
    SANDBOX_URL,
    ClientConfig,
    ClientEnvironment,
    ConfigError,
    ConfigurationMissing,
    CTechPayError,
    MerchantAttributes,
    OrderResponse,
    PaymentClient,
    ResponseParseFailure,
    ResponseReadFailure,
    TransportFailure,
    build_environment,
    build_order_form,
    format_amount,
    load_client_config,
    load_env_file,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = (
    "DEFAULT_CANCEL_TEXT",
    "PRODUCTION_URL",
    "SANDBOX_URL",
    "CTechPayError",
    "ClientConfig",
    "ClientEnvironment",
    "ConfigError",
    "ConfigurationMissing",
    "MerchantAttributes",
    "OrderResponse",
    "PaymentClient",
    "ResponseParseFailure",
    "ResponseReadFailure",
    "TransportFailure",
    "build_environment",
    "build_order_form",
    "create_client",
    "format_amount",
    "initiate_card_order",
    "load_client_config",
    "load_env_file",
)
