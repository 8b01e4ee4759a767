"""
Core primitives for creating CTechPay card orders.
"""

from .client import PRODUCTION_URL, SANDBOX_URL, PaymentClient
from .config import ClientConfig, load_client_config
from .environment import ClientEnvironment, build_environment, load_env_file
from .errors import (
    ConfigError,
    ConfigurationMissing,
    CTechPayError,
    ResponseParseFailure,
    ResponseReadFailure,
    TransportFailure,
)
from .payloads import (
    DEFAULT_CANCEL_TEXT,
    MerchantAttributes,
    OrderResponse,
    build_order_form,
    format_amount,
)

__all__ = [
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
    "format_amount",
    "load_client_config",
    "load_env_file",
]
