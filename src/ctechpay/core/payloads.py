"""
Helpers for building the form sent to the CTechPay order endpoint and for
decoding its answer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional

from .errors import ResponseParseFailure

__all__ = [
    "DEFAULT_CANCEL_TEXT",
    "MerchantAttributes",
    "OrderResponse",
    "build_order_form",
    "format_amount",
    "to_amount",
]

DEFAULT_CANCEL_TEXT = "Cancel Payment"


@dataclass(frozen=True)
class MerchantAttributes:
    """
    Customisations of the hosted payment page.

    Instances are immutable; the client swaps a whole new instance in whenever
    one of its setters is called.
    """

    redirect_url: str = ""
    cancel_url: str = ""
    cancel_text: str = ""

    def as_form(self) -> Dict[str, str]:
        return {
            "merchantAttributes": "true",
            "redirectUrl": self.redirect_url,
            "cancelUrl": self.cancel_url,
            "cancelText": self.cancel_text,
        }


def to_amount(value: Decimal | str | int | float) -> Decimal:
    """
    Coerce ``value`` into a non-negative, finite :class:`~decimal.Decimal`.

    Floats go through ``str`` so ``0.1`` stays ``0.1`` instead of its binary
    expansion.
    """
    if isinstance(value, bool):
        raise ValueError("Amount must be a number, not a boolean")
    if isinstance(value, float):
        value = str(value)
    try:
        amount = value if isinstance(value, Decimal) else Decimal(value)
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"Amount must be a valid decimal number, got {value!r}") from exc

    if not amount.is_finite():
        raise ValueError(f"Amount must be finite, got {amount}")
    if amount < 0:
        raise ValueError(f"Amount must not be negative, got {amount}")
    # -0 would otherwise be sent as "-0"
    return amount.copy_abs() if amount.is_zero() else amount


def format_amount(amount: Decimal) -> str:
    """Render ``amount`` positionally with every digit it carries."""
    return format(amount, "f")


def build_order_form(
    token: str,
    amount: Decimal,
    attributes: Optional[MerchantAttributes] = None,
) -> Dict[str, str]:
    """
    Build the ``application/x-www-form-urlencoded`` fields of an order request.

    ``attributes`` is only passed for merchant orders; callers are expected to
    have checked it is complete.
    """
    form = {
        "token": token,
        "amount": format_amount(amount),
    }
    if attributes is not None:
        form.update(attributes.as_form())
    return form


@dataclass(frozen=True)
class OrderResponse:
    txn_id: str
    order_reference: str
    payment_page_url: str
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_response(
        cls,
        payload: Any,
        txn_id: str,
        *,
        status_code: Optional[int] = None,
    ) -> "OrderResponse":
        if not isinstance(payload, dict):
            raise ResponseParseFailure(
                f"Expected a JSON object from CTechPay, got {type(payload).__name__}",
                status_code=status_code,
            )

        values = {}
        for key in ("order_reference", "payment_page_URL"):
            value = payload.get(key)
            if not isinstance(value, str):
                raise ResponseParseFailure(
                    f"CTechPay response (HTTP {status_code}) has no string '{key}': {payload}",
                    status_code=status_code,
                )
            values[key] = value

        return cls(
            txn_id=txn_id,
            order_reference=values["order_reference"],
            payment_page_url=values["payment_page_URL"],
            raw=payload,
        )
