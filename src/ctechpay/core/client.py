"""
HTTP client for the CTechPay order endpoint.
"""

from __future__ import annotations

import logging
import math
import threading
from datetime import timedelta
from decimal import Decimal
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

import requests

from .errors import (
    ConfigError,
    ConfigurationMissing,
    ResponseParseFailure,
    ResponseReadFailure,
    TransportFailure,
)
from .payloads import (
    DEFAULT_CANCEL_TEXT,
    MerchantAttributes,
    OrderResponse,
    build_order_form,
    to_amount,
)

__all__ = [
    "PRODUCTION_URL",
    "SANDBOX_URL",
    "PaymentClient",
]

PRODUCTION_URL = "https://api.ctechpay.com"
SANDBOX_URL = "https://api-sandbox.ctechpay.com"

_logger = logging.getLogger(__name__)


def _timeout_seconds(timeout: float | int | timedelta) -> float:
    seconds = timeout.total_seconds() if isinstance(timeout, timedelta) else float(timeout)
    if not math.isfinite(seconds) or seconds <= 0:
        raise ConfigError(f"Timeout must be a positive finite number, got {timeout!r}")
    return seconds


def _check_https_url(url: str, field_name: str) -> None:
    parts = urlsplit(url)
    if parts.scheme != "https" or not parts.netloc:
        raise ConfigError(f"{field_name} must be an absolute https:// URL, got '{url}'")


class PaymentClient:
    """
    Client for creating card payment orders on CTechPay.

    Token, endpoint and timeout are fixed at construction. The merchant
    attributes (redirect URL, cancel URL and cancel text) can be changed at any
    time and apply to the next merchant order. They are kept as one immutable
    :class:`MerchantAttributes` snapshot so an order in flight on another
    thread always sees a consistent set.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = PRODUCTION_URL,
        timeout: float | int | timedelta = 30,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
        strict_urls: bool = True,
    ) -> None:
        if not token:
            raise ConfigError("API token must not be empty")
        base_url = base_url.strip().rstrip("/")
        if not base_url:
            raise ConfigError("Base URL must not be empty")

        self.api_token = token
        self.base_url = base_url
        self.timeout = _timeout_seconds(timeout)
        self.strict_urls = strict_urls
        self.logger = logger or _logger
        self._owns_session = session is None
        self.session = session or requests.Session()
        self._attributes = MerchantAttributes()
        self._attributes_lock = threading.Lock()

    @classmethod
    def production(
        cls,
        token: str,
        timeout: float | int | timedelta = 30,
        *,
        base_url: str = PRODUCTION_URL,
        **kwargs: Any,
    ) -> "PaymentClient":
        return cls(token, base_url=base_url, timeout=timeout, **kwargs)

    @classmethod
    def sandbox(
        cls,
        token: str,
        timeout: float | int | timedelta = 30,
        *,
        base_url: str = SANDBOX_URL,
        **kwargs: Any,
    ) -> "PaymentClient":
        """Client bound to the sandbox endpoint for testing integrations."""
        return cls(token, base_url=base_url, timeout=timeout, **kwargs)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r}, token='***')"

    def __enter__(self) -> "PaymentClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self.session.close()

    @property
    def order_url(self) -> str:
        return f"{self.base_url}/?endpoint=order"

    @property
    def merchant_attributes(self) -> MerchantAttributes:
        return self._attributes

    def set_redirect_url(self, redirect_url: str) -> None:
        """
        Set the URL the customer is sent back to after paying.

        Applies to every later merchant order.
        """
        if self.strict_urls:
            _check_https_url(redirect_url, "redirect URL")
        with self._attributes_lock:
            current = self._attributes
            self._attributes = MerchantAttributes(
                redirect_url=redirect_url,
                cancel_url=current.cancel_url,
                cancel_text=current.cancel_text,
            )

    def set_cancel_url(self, cancel_url: str, cancel_text: str = "") -> None:
        """
        Set the URL used when the customer abandons the payment page.

        ``cancel_text`` labels the cancel link and defaults to
        ``"Cancel Payment"`` when empty.
        """
        if self.strict_urls:
            _check_https_url(cancel_url, "cancel URL")
        with self._attributes_lock:
            current = self._attributes
            self._attributes = MerchantAttributes(
                redirect_url=current.redirect_url,
                cancel_url=cancel_url,
                cancel_text=cancel_text or DEFAULT_CANCEL_TEXT,
            )

    def _merchant_snapshot(self) -> MerchantAttributes:
        attributes = self._attributes
        if not attributes.redirect_url:
            raise ConfigurationMissing(
                "redirect URL must be set via PaymentClient.set_redirect_url()"
            )
        if not attributes.cancel_url:
            raise ConfigurationMissing(
                "cancel URL must be set via PaymentClient.set_cancel_url()"
            )
        if not attributes.cancel_text:
            raise ConfigurationMissing(
                "cancel text must be set via PaymentClient.set_cancel_url()"
            )
        return attributes

    def build_order_form(
        self,
        amount: Decimal | str | int | float,
        merchant: bool = False,
    ) -> Dict[str, str]:
        attributes = self._merchant_snapshot() if merchant else None
        return build_order_form(self.api_token, to_amount(amount), attributes)

    def initiate_card_order(
        self,
        txn_id: str,
        amount: Decimal | str | int | float,
        merchant: bool = False,
    ) -> OrderResponse:
        """
        Create a card payment order and return where to send the customer.

        ``txn_id`` is the caller's own reference. It is not sent to CTechPay
        and is copied onto the returned :class:`OrderResponse` unchanged.

        Exactly one request is made. Failures surface as
        :class:`ConfigurationMissing`, :class:`TransportFailure`,
        :class:`ResponseReadFailure` or :class:`ResponseParseFailure`.
        """
        form = self.build_order_form(amount, merchant)
        url = self.order_url

        self.logger.debug("Sending order request to CTechPay at %s", url)
        try:
            response = self.session.post(url, data=form, timeout=self.timeout, stream=True)
        except requests.RequestException as exc:
            raise TransportFailure(f"Failed to create order at {url}: {exc}") from exc

        try:
            try:
                body = response.content
            except requests.RequestException as exc:
                raise ResponseReadFailure(
                    f"Failed to read CTechPay response body: {exc}",
                    status_code=response.status_code,
                ) from exc

            if response.status_code >= 400:
                self.logger.warning(
                    "CTechPay responded with HTTP %s to order request", response.status_code
                )

            try:
                payload = response.json()
            except ValueError as exc:
                raise ResponseParseFailure(
                    f"Failed to parse order response as JSON (HTTP {response.status_code}): {body[:200]!r}",
                    status_code=response.status_code,
                ) from exc
        finally:
            response.close()

        return OrderResponse.from_response(
            payload, txn_id, status_code=response.status_code
        )
