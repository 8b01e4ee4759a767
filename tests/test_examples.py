"""Tests for the example scripts shipped next to the package."""

from __future__ import annotations

import importlib.util
from pathlib import Path
from unittest.mock import patch

import pytest

from conftest import make_session

EXAMPLE = Path(__file__).resolve().parent.parent / "examples" / "create_order.py"


@pytest.fixture
def create_order():
    spec = importlib.util.spec_from_file_location("create_order_example", EXAMPLE)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.mark.parametrize("amount", ["abc", "-5"])
def test_bad_amount_exits_cleanly(create_order, monkeypatch, tmp_path, amount):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.argv", ["create_order.py", amount, "--api-token", "tok"])
    session = make_session()

    with patch("ctechpay.core.client.requests.Session", return_value=session):
        assert create_order.main() == 1

    session.post.assert_not_called()


def test_order_created(create_order, monkeypatch, tmp_path, ok_body):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.argv", ["create_order.py", "1500.50", "--api-token", "tok"])
    session = make_session(ok_body)

    with patch("ctechpay.core.client.requests.Session", return_value=session):
        assert create_order.main() == 0

    assert session.post.call_args.kwargs["data"]["amount"] == "1500.50"
