"""decoders.py

Turn generic JSON trees (see :mod:`json_value`) into **domain models**.

Every decoder reads its fields in a fixed order and stops at the first
missing or mistyped one, re-raising that field's error with its full path
(``$.asks[3].price``). No partially filled record is ever returned. List
decoders are element-wise: one malformed element aborts the whole list.

The only lenient function here is :func:`decode_error_payload`, which reads
the optional error envelope of a failed request and answers ``None`` when it
cannot.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, TypeVar

from .errors import DecodeError, TypeMismatch
from .json_value import (
    decode_json,
    expect_bool,
    expect_float,
    expect_float_or_default,
    expect_int,
    expect_list,
    expect_map,
    expect_string,
    expect_time_text,
    expect_timestamp,
)
from .model import Account, HistoryEntry, Order, OrderBook, Stats, Trade, UserInfo

T = TypeVar("T")

ORDER_SIDES = ("buy", "sell")
ORDER_TYPES = ("limit", "market")

# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def _field(m: dict, key: str, accessor: Callable[[Any, str], T], path: str) -> T:
    return accessor(m.get(key), f"{path}.{key}")


def _one_of(m: dict, key: str, choices: tuple[str, ...], path: str) -> str:
    value = _field(m, key, expect_string, path)
    if value not in choices:
        raise TypeMismatch(f"{path}.{key}", f"expected one of {choices} but {value!r} found")
    return value


def _each(v: Any, decoder: Callable[[Any, str], T], path: str) -> tuple[T, ...]:
    return tuple(decoder(e, f"{path}[{i}]") for i, e in enumerate(expect_list(v, path)))

# -----------------------------------------------------------------------------
# Market data
# -----------------------------------------------------------------------------

def decode_server_time(v: Any, path: str = "$") -> datetime:
    """`/timestamp` answers a bare epoch-seconds number."""
    return expect_timestamp(v, path)


def decode_stats(v: Any, path: str = "$") -> Stats:
    m = expect_map(v, path)
    at = _field(m, "at", expect_timestamp, path)
    path = f"{path}.ticker"
    t = expect_map(m.get("ticker"), path)
    return Stats(
        at=at,
        buy=_field(t, "buy", expect_float, path),
        sell=_field(t, "sell", expect_float, path),
        low=_field(t, "low", expect_float, path),
        high=_field(t, "high", expect_float, path),
        last=_field(t, "last", expect_float, path),
        vol=_field(t, "vol", expect_float, path),
        amount=expect_float_or_default(t.get("amount"), 0.0, f"{path}.amount"),
    )


def decode_order(v: Any, path: str = "$") -> Order:
    m = expect_map(v, path)
    return Order(
        id=_field(m, "id", expect_int, path),
        side=_one_of(m, "side", ORDER_SIDES, path),
        ord_type=_one_of(m, "ord_type", ORDER_TYPES, path),
        price=_field(m, "price", expect_float, path),
        avg_price=_field(m, "avg_price", expect_float, path),
        state=_field(m, "state", expect_string, path),
        market=_field(m, "market", expect_string, path),
        created_at=_field(m, "created_at", expect_time_text, path),
        volume=_field(m, "volume", expect_float, path),
        remaining_volume=_field(m, "remaining_volume", expect_float, path),
        executed_volume=_field(m, "executed_volume", expect_float, path),
        trades_count=_field(m, "trades_count", expect_int, path),
    )


def decode_orders(v: Any, path: str = "$") -> tuple[Order, ...]:
    return _each(v, decode_order, path)


def decode_order_book(v: Any, path: str = "$") -> OrderBook:
    """Asks and bids keep the order the server sent them in."""
    m = expect_map(v, path)
    asks = decode_orders(m.get("asks"), f"{path}.asks")
    bids = decode_orders(m.get("bids"), f"{path}.bids")
    return OrderBook(asks=asks, bids=bids)


def decode_history_entry(v: Any, path: str = "$") -> HistoryEntry:
    m = expect_map(v, path)
    return HistoryEntry(
        id=_field(m, "id", expect_int, path),
        price=_field(m, "price", expect_float, path),
        volume=_field(m, "volume", expect_float, path),
        funds=_field(m, "funds", expect_float, path),
        market=_field(m, "market", expect_string, path),
        created_at=_field(m, "created_at", expect_time_text, path),
    )


def decode_history(v: Any, path: str = "$") -> tuple[HistoryEntry, ...]:
    return _each(v, decode_history_entry, path)

# -----------------------------------------------------------------------------
# Account
# -----------------------------------------------------------------------------

def decode_account(v: Any, path: str = "$") -> Account:
    m = expect_map(v, path)
    return Account(
        currency=_field(m, "currency", expect_string, path),
        balance=_field(m, "balance", expect_float, path),
        locked=_field(m, "locked", expect_float, path),
    )


def decode_user_info(v: Any, path: str = "$") -> UserInfo:
    m = expect_map(v, path)
    email = _field(m, "email", expect_string, path)
    activated = _field(m, "activated", expect_bool, path)
    accounts = _each(m.get("accounts"), decode_account, f"{path}.accounts")
    return UserInfo(email=email, activated=activated, accounts=accounts)


def decode_trade(v: Any, path: str = "$") -> Trade:
    m = expect_map(v, path)
    return Trade(
        id=_field(m, "id", expect_int, path),
        price=_field(m, "price", expect_float, path),
        volume=_field(m, "volume", expect_float, path),
        funds=_field(m, "funds", expect_float, path),
        market=_field(m, "market", expect_string, path),
        created_at=_field(m, "created_at", expect_time_text, path),
        side=_field(m, "side", expect_string, path),
    )


def decode_trades(v: Any, path: str = "$") -> tuple[Trade, ...]:
    return _each(v, decode_trade, path)

# -----------------------------------------------------------------------------
# Error envelope
# -----------------------------------------------------------------------------

def decode_error_payload(body: bytes | str) -> tuple[int, str] | None:
    """Best-effort read of ``{"error": {"code": int, "message": str}}``.

    Returns ``(code, message)`` or ``None`` when the body is not JSON or
    has another shape; never raises a decode error of its own.
    """
    try:
        m = expect_map(decode_json(body))
        err = _field(m, "error", expect_map, "$")
        code = _field(err, "code", expect_int, "$.error")
        message = _field(err, "message", expect_string, "$.error")
    except DecodeError:
        return None
    return code, message
