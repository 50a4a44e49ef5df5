"""frames.py

pandas views of the domain models, for whatever renders them.

Each helper returns one row per record and one column per model field. An
empty input still yields the full column set so downstream formatting does
not have to special-case it.
"""

from __future__ import annotations

from typing import Iterable

import pandas as pd
from pydantic import BaseModel

from .model import Account, DepthRow, HistoryEntry, Order, RunningRow, Trade, UserInfo


def _frame(records: Iterable[BaseModel], model: type[BaseModel]) -> pd.DataFrame:
    columns = list(model.model_fields)
    return pd.DataFrame([r.model_dump() for r in records], columns=columns)


def depth_frame(rows: Iterable[DepthRow]) -> pd.DataFrame:
    return _frame(rows, DepthRow)


def orders_frame(orders: Iterable[Order]) -> pd.DataFrame:
    """Orders plus the quote-currency value of each volume column."""
    df = _frame(orders, Order)
    df["funds"] = df["volume"] * df["price"]
    df["remaining_funds"] = df["remaining_volume"] * df["price"]
    df["executed_funds"] = df["executed_volume"] * df["price"]
    return df


def history_frame(entries: Iterable[HistoryEntry]) -> pd.DataFrame:
    return _frame(entries, HistoryEntry)


def trades_frame(trades: Iterable[Trade]) -> pd.DataFrame:
    return _frame(trades, Trade)


def running_frame(rows: Iterable[RunningRow]) -> pd.DataFrame:
    """Flatten :class:`RunningRow` into the deal's columns plus the totals."""
    rows = list(rows)
    base = [r.entry.model_dump() for r in rows]
    df = pd.DataFrame(base)
    for col in ("avg_price", "sum_volume", "sum_funds"):
        df[col] = [getattr(r, col) for r in rows]
    return df


def accounts_frame(info: UserInfo) -> pd.DataFrame:
    return _frame(info.accounts, Account)
