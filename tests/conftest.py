"""Shared fixtures."""

import pytest

from tests.payloads import order_json


@pytest.fixture
def ticker_json() -> dict:
    return {
        "at": 1502366400,
        "ticker": {
            "buy": "99000.0",
            "sell": "101000.0",
            "low": "95000.0",
            "high": "105000.0",
            "last": "100000.0",
            "vol": "12.5",
            "amount": "1250000.0",
        },
    }


@pytest.fixture
def book_json() -> dict:
    return {
        "asks": [
            order_json(id=1, side="sell", price="10", remaining_volume="5"),
            order_json(id=2, side="sell", price="11", remaining_volume="5"),
        ],
        "bids": [
            order_json(id=3, side="buy", price="9", remaining_volume="4"),
            order_json(id=4, side="buy", price="8", remaining_volume="6"),
        ],
    }


@pytest.fixture
def user_json() -> dict:
    return {
        "email": "trader@example.com",
        "activated": True,
        "accounts": [
            {"currency": "uah", "balance": "1500.25", "locked": "100.0"},
            {"currency": "btc", "balance": "0.01", "locked": "0.0"},
        ],
    }
