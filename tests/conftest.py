"""Shared fixtures: fake HTTP sessions that never touch the network."""

from __future__ import annotations

import io
from typing import Optional
from unittest.mock import MagicMock

import pytest
import requests

from ctechpay.core.config import _PARAMETER_TO_ENV_KEY


class BrokenStream(io.BytesIO):
    """Raw stream that dies half-way through the body."""

    def read(self, *args, **kwargs):
        raise requests.exceptions.ChunkedEncodingError("Connection broken: IncompleteRead")


def make_response(body: bytes, status_code: int = 200, raw: Optional[io.IOBase] = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.raw = raw if raw is not None else io.BytesIO(body)
    response.headers["Content-Type"] = "application/json"
    response.encoding = "utf-8"
    return response


def make_session(body: bytes = b"", status_code: int = 200, raw: Optional[io.IOBase] = None) -> MagicMock:
    session = MagicMock(spec=requests.Session)
    session.post.return_value = make_response(body, status_code, raw)
    return session


@pytest.fixture
def ok_body() -> bytes:
    return b'{"order_reference":"ORD-1","payment_page_URL":"https://pay.example/x"}'


@pytest.fixture
def session(ok_body) -> MagicMock:
    return make_session(ok_body)


@pytest.fixture(autouse=True)
def _clean_ctechpay_env(monkeypatch):
    for key in _PARAMETER_TO_ENV_KEY.values():
        monkeypatch.delenv(key, raising=False)
