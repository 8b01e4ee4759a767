"""Tests for the ctechpay command line entry point."""

from __future__ import annotations

from unittest.mock import patch

import pytest
import requests

from conftest import make_session
from ctechpay import SANDBOX_URL
from ctechpay.cli import build_parser, run_cli


def _run(argv, session):
    with patch("ctechpay.core.client.requests.Session", return_value=session):
        return run_cli(argv)


def test_successful_order_prints_payment_page(tmp_path, capsys, session):
    argv = [
        "10.005",
        "--txn-id",
        "txn-42",
        "--sandbox",
        "--env-file",
        str(tmp_path / "missing.env"),
        "--set",
        "CTECHPAY_API_TOKEN=tok",
    ]

    assert _run(argv, session) == 0
    assert capsys.readouterr().out.strip() == "https://pay.example/x"
    assert session.post.call_args.args[0] == f"{SANDBOX_URL}/?endpoint=order"
    assert session.post.call_args.kwargs["data"]["amount"] == "10.005"


def test_missing_token_is_reported(tmp_path, session):
    assert _run(["1", "--env-file", str(tmp_path / "missing.env")], session) == 1
    session.post.assert_not_called()


def test_merchant_order_without_redirect_fails(tmp_path, session):
    argv = [
        "1",
        "--merchant",
        "--env-file",
        str(tmp_path / "missing.env"),
        "--set",
        "CTECHPAY_API_TOKEN=tok",
    ]

    assert _run(argv, session) == 1
    session.post.assert_not_called()


def test_transport_failure_exit_code(tmp_path):
    session = make_session()
    session.post.side_effect = requests.ConnectionError("Connection refused")
    argv = ["1", "--env-file", str(tmp_path / "missing.env"), "--set", "CTECHPAY_API_TOKEN=tok"]

    assert _run(argv, session) == 1


def test_override_must_be_key_value():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["1", "--set", "nonsense"])


def test_cli_closes_the_session_it_opened(tmp_path, session):
    argv = ["1", "--env-file", str(tmp_path / "missing.env"), "--set", "CTECHPAY_API_TOKEN=tok"]

    assert _run(argv, session) == 0
    session.close.assert_called_once_with()
