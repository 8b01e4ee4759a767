"""
Configuration objects for the CTechPay client.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .client import PRODUCTION_URL, SANDBOX_URL
from .environment import build_environment
from .errors import ConfigError
from .payloads import DEFAULT_CANCEL_TEXT

__all__ = [
    "ClientConfig",
    "load_client_config",
]

_PARAMETER_TO_ENV_KEY = {
    "api_token": "CTECHPAY_API_TOKEN",
    "sandbox": "CTECHPAY_SANDBOX",
    "production_url": "CTECHPAY_PRODUCTION_URL",
    "sandbox_url": "CTECHPAY_SANDBOX_URL",
    "timeout_seconds": "CTECHPAY_TIMEOUT_SECONDS",
    "redirect_url": "CTECHPAY_REDIRECT_URL",
    "cancel_url": "CTECHPAY_CANCEL_URL",
    "cancel_text": "CTECHPAY_CANCEL_TEXT",
    "strict_urls": "CTECHPAY_STRICT_URLS",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _parse_bool(raw: str, key: str, origin: str = "") -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"{key} must be a boolean (true/false), got '{raw}'{origin}")


def _parse_timeout(raw: str, origin: str = "") -> float:
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigError(
            f"CTECHPAY_TIMEOUT_SECONDS must be a number, got '{raw}'{origin}"
        ) from exc
    if not math.isfinite(timeout) or timeout <= 0:
        raise ConfigError(
            f"CTECHPAY_TIMEOUT_SECONDS must be a finite number greater than zero, got '{raw}'{origin}"
        )
    return timeout


def _collect_parameter_overrides(explicit: Mapping[str, Any]) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    for key, value in explicit.items():
        if value is None:
            continue
        overrides[_PARAMETER_TO_ENV_KEY[key]] = _stringify(value)
    return overrides


@dataclass(frozen=True)
class ClientConfig:
    api_token: str = field(repr=False)
    sandbox: bool = False
    production_url: str = PRODUCTION_URL
    sandbox_url: str = SANDBOX_URL
    timeout_seconds: float = 30.0
    redirect_url: Optional[str] = None
    cancel_url: Optional[str] = None
    cancel_text: str = DEFAULT_CANCEL_TEXT
    strict_urls: bool = True

    @property
    def base_url(self) -> str:
        return self.sandbox_url if self.sandbox else self.production_url

    @classmethod
    def from_mapping(
        cls,
        values: Mapping[str, str],
        *,
        sources: Optional[Mapping[str, str]] = None,
    ) -> "ClientConfig":
        def origin(key: str) -> str:
            return f" (from {sources.get(key, 'default')})" if sources else ""

        api_token = values.get("CTECHPAY_API_TOKEN", "").strip()
        if not api_token:
            raise ConfigError("CTECHPAY_API_TOKEN must be provided")

        sandbox = _parse_bool(
            values.get("CTECHPAY_SANDBOX", "false"),
            "CTECHPAY_SANDBOX",
            origin("CTECHPAY_SANDBOX"),
        )
        strict_urls = _parse_bool(
            values.get("CTECHPAY_STRICT_URLS", "true"),
            "CTECHPAY_STRICT_URLS",
            origin("CTECHPAY_STRICT_URLS"),
        )
        production_url = values.get("CTECHPAY_PRODUCTION_URL", PRODUCTION_URL).rstrip("/")
        sandbox_url = values.get("CTECHPAY_SANDBOX_URL", SANDBOX_URL).rstrip("/")
        timeout_seconds = _parse_timeout(
            values.get("CTECHPAY_TIMEOUT_SECONDS", "30"),
            origin("CTECHPAY_TIMEOUT_SECONDS"),
        )

        return cls(
            api_token=api_token,
            sandbox=sandbox,
            production_url=production_url,
            sandbox_url=sandbox_url,
            timeout_seconds=timeout_seconds,
            redirect_url=values.get("CTECHPAY_REDIRECT_URL") or None,
            cancel_url=values.get("CTECHPAY_CANCEL_URL") or None,
            cancel_text=values.get("CTECHPAY_CANCEL_TEXT") or DEFAULT_CANCEL_TEXT,
            strict_urls=strict_urls,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        api_token: Optional[str] = None,
        sandbox: Optional[bool] = None,
        production_url: Optional[str] = None,
        sandbox_url: Optional[str] = None,
        timeout_seconds: Optional[float | int | str] = None,
        redirect_url: Optional[str] = None,
        cancel_url: Optional[str] = None,
        cancel_text: Optional[str] = None,
        strict_urls: Optional[bool] = None,
    ) -> "ClientConfig":
        parameter_overrides = _collect_parameter_overrides(
            {
                "api_token": api_token,
                "sandbox": sandbox,
                "production_url": production_url,
                "sandbox_url": sandbox_url,
                "timeout_seconds": timeout_seconds,
                "redirect_url": redirect_url,
                "cancel_url": cancel_url,
                "cancel_text": cancel_text,
                "strict_urls": strict_urls,
            }
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables, sources=environment.sources)


def load_client_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    api_token: Optional[str] = None,
    sandbox: Optional[bool] = None,
    production_url: Optional[str] = None,
    sandbox_url: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
    redirect_url: Optional[str] = None,
    cancel_url: Optional[str] = None,
    cancel_text: Optional[str] = None,
    strict_urls: Optional[bool] = None,
) -> ClientConfig:
    """
    Convenience wrapper that mirrors :meth:`ClientConfig.from_env`.

    Settings can come from environment variables, a ``.env`` file, keyword
    arguments, or any combination; keyword arguments win over ``overrides``,
    which win over the file and the environment.
    """
    return ClientConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        api_token=api_token,
        sandbox=sandbox,
        production_url=production_url,
        sandbox_url=sandbox_url,
        timeout_seconds=timeout_seconds,
        redirect_url=redirect_url,
        cancel_url=cancel_url,
        cancel_text=cancel_text,
        strict_urls=strict_urls,
    )
