"""stats.py

Reducers over deal lists (:class:`HistoryEntry` or :class:`Trade`).

Anything exposing ``price``, ``volume`` and ``funds`` works. On empty input
the minima and maxima are ``0`` and every average is ``0.0``: a zero divisor
never produces ``nan``/``inf`` here, so a printed summary of an empty
history reads as zeros.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from .model import HistoryEntry, RunningRow, Summary, Trade


class Deal(Protocol):
    price: float
    volume: float
    funds: float


def _div(a: float, b: float) -> float:
    return a / b if b else 0.0

# -----------------------------------------------------------------------------
# Sums
# -----------------------------------------------------------------------------

def sum_volume(deals: Sequence[Deal]) -> float:
    return sum((d.volume for d in deals), 0.0)


def sum_funds(deals: Sequence[Deal]) -> float:
    return sum((d.funds for d in deals), 0.0)

# -----------------------------------------------------------------------------
# Minima / maxima
# -----------------------------------------------------------------------------

def min_price(deals: Sequence[Deal]) -> float:
    return min((d.price for d in deals), default=0.0)


def min_volume(deals: Sequence[Deal]) -> float:
    return min((d.volume for d in deals), default=0.0)


def min_funds(deals: Sequence[Deal]) -> float:
    return min((d.funds for d in deals), default=0.0)


def max_price(deals: Sequence[Deal]) -> float:
    return max((d.price for d in deals), default=0.0)


def max_volume(deals: Sequence[Deal]) -> float:
    return max((d.volume for d in deals), default=0.0)


def max_funds(deals: Sequence[Deal]) -> float:
    return max((d.funds for d in deals), default=0.0)

# -----------------------------------------------------------------------------
# Averages
# -----------------------------------------------------------------------------

def avg_price(deals: Sequence[Deal]) -> float:
    """Volume-weighted price: total funds over total volume."""
    return _div(sum_funds(deals), sum_volume(deals))


def avg_volume(deals: Sequence[Deal]) -> float:
    return _div(sum_volume(deals), len(deals))


def avg_funds(deals: Sequence[Deal]) -> float:
    return _div(sum_funds(deals), len(deals))

# -----------------------------------------------------------------------------
# Composite views
# -----------------------------------------------------------------------------

def summarize(deals: Sequence[Deal]) -> Summary:
    """Every reducer above in one record."""
    return Summary(
        count=len(deals),
        sum_volume=sum_volume(deals),
        sum_funds=sum_funds(deals),
        min_price=min_price(deals),
        min_volume=min_volume(deals),
        min_funds=min_funds(deals),
        avg_price=avg_price(deals),
        avg_volume=avg_volume(deals),
        avg_funds=avg_funds(deals),
        max_price=max_price(deals),
        max_volume=max_volume(deals),
        max_funds=max_funds(deals),
    )


def running_totals(deals: Sequence[HistoryEntry | Trade]) -> list[RunningRow]:
    """Pair each deal with the cumulative volume, funds and average price."""
    rows: list[RunningRow] = []
    total_volume = 0.0
    total_funds = 0.0
    for deal in deals:
        total_volume += deal.volume
        total_funds += deal.funds
        rows.append(RunningRow(
            entry=deal,
            avg_price=_div(total_funds, total_volume),
            sum_volume=total_volume,
            sum_funds=total_funds,
        ))
    return rows
