"""model.py

Pydantic **domain models** returned by the exchange access layer.

These classes mirror the JSON payloads coming from the Kuna.io API so that
callers get *typed*, *immutable* values instead of raw dicts. Validation of
the wire format happens in :mod:`decoders`; the models only fix the shape.

Every model is frozen: one instance is built per API call and owned by the
caller.
"""

from __future__ import annotations

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from datetime import datetime
from typing import Literal

# Third-party
from pydantic import BaseModel, ConfigDict


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)

# -----------------------------------------------------------------------------
# Market data
# -----------------------------------------------------------------------------

class Stats(_Frozen):
    """Latest 24 h ticker from `/tickers/{market}`."""

    at: datetime                   # server time of the snapshot
    buy: float                     # best bid
    sell: float                    # best ask
    low: float                     # lowest deal price, last 24 h
    high: float                    # highest deal price, last 24 h
    last: float                    # last deal price
    vol: float                     # base-currency volume, last 24 h
    amount: float = 0.0            # quote-currency turnover, last 24 h


class Order(_Frozen):
    """Single order, either an order-book level or one of the user's orders."""

    id: int
    side: Literal["buy", "sell"]         # asks are always "sell", bids "buy"
    ord_type: Literal["limit", "market"]
    price: float                          # price for one base unit
    avg_price: float
    state: str                            # e.g. "wait", "done", "cancel"
    market: str                           # e.g. "btcuah"
    created_at: datetime
    volume: float                         # requested volume
    remaining_volume: float               # still open, as reported by server
    executed_volume: float
    trades_count: int


class OrderBook(_Frozen):
    """Open asks (ascending price) and bids (descending price)."""

    asks: tuple[Order, ...]
    bids: tuple[Order, ...]


class HistoryEntry(_Frozen):
    """Public deal from `/trades`."""

    id: int
    price: float
    volume: float                  # base currency
    funds: float                   # quote currency, as reported by server
    market: str
    created_at: datetime

# -----------------------------------------------------------------------------
# Account
# -----------------------------------------------------------------------------

class Account(_Frozen):
    """One currency balance of the authenticated user."""

    currency: str                  # e.g. "uah", "btc"
    balance: float                 # available, excludes `locked`
    locked: float                  # frozen on open orders


class UserInfo(_Frozen):
    email: str
    activated: bool
    accounts: tuple[Account, ...]


class Trade(_Frozen):
    """Fill belonging to the authenticated user, from `/trades/my`."""

    id: int
    price: float
    volume: float
    funds: float
    market: str
    created_at: datetime
    side: str                      # "bid" or "ask", as sent by the server

# -----------------------------------------------------------------------------
# Derived values (aggregator / statistics output)
# -----------------------------------------------------------------------------

class PriceLevel(_Frozen):
    """Price and open volume of one order-book level."""

    price: float
    volume: float


class DepthRow(_Frozen):
    """One row of a truncated order-book walk with running totals."""

    price: float
    volume: float                  # level volume, clipped on the last row
    funds: float                   # volume * price
    avg_price: float               # sum_funds / sum_volume
    sum_volume: float
    sum_funds: float


class RunningRow(_Frozen):
    """A deal together with the totals of every deal up to and including it."""

    entry: HistoryEntry | Trade
    avg_price: float
    sum_volume: float
    sum_funds: float


class Summary(_Frozen):
    """Totals, minima, averages and maxima over a list of deals."""

    count: int
    sum_volume: float
    sum_funds: float
    min_price: float
    min_volume: float
    min_funds: float
    avg_price: float
    avg_volume: float
    avg_funds: float
    max_price: float
    max_volume: float
    max_funds: float
