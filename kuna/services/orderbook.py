"""orderbook.py

Walk an order-book side and truncate it at a **ceiling**.

The levels are consumed in the order given. The server already sorts asks
ascending and bids descending, so the walk always starts at the best price
and is never re-sorted here.

A ceiling is either a base-currency volume or a quote-currency amount
(``ceiling_is_funds``). The level that reaches it is clipped to exactly the
remainder and is the last row emitted. A ceiling ``<= 0`` means "no limit".
"""

from __future__ import annotations

from typing import Iterable, Literal

from .model import DepthRow, Order, OrderBook, PriceLevel

Side = Literal["sell", "buy"]


def levels_from_orders(orders: Iterable[Order]) -> tuple[PriceLevel, ...]:
    """Price and *remaining* volume of each order-book entry."""
    return tuple(PriceLevel(price=o.price, volume=o.remaining_volume) for o in orders)


def book_side(book: OrderBook, side: Side) -> tuple[PriceLevel, ...]:
    """``"sell"`` walks the asks (what a buyer can take), ``"buy"`` the bids."""
    if side == "sell":
        return levels_from_orders(book.asks)
    if side == "buy":
        return levels_from_orders(book.bids)
    raise ValueError(f"invalid side {side!r}. Valid are: sell, buy")


def aggregate(
    levels: Iterable[PriceLevel],
    ceiling: float = 0.0,
    ceiling_is_funds: bool = False,
) -> list[DepthRow]:
    """Return running-total rows, clipped at *ceiling*.

    Parameters
    ----------
    levels : iterable of PriceLevel
        Order-book side in server order.
    ceiling : float, default 0
        Cap on cumulative volume (or funds). ``<= 0`` disables clipping.
    ceiling_is_funds : bool, default False
        Interpret *ceiling* in quote currency instead of base volume.

    Examples
    --------
    >>> rows = aggregate([PriceLevel(price=10, volume=5),
    ...                   PriceLevel(price=11, volume=5)], ceiling=7)
    >>> [(r.volume, r.sum_volume) for r in rows]
    [(5.0, 5.0), (2.0, 7.0)]
    """
    rows: list[DepthRow] = []
    sum_volume = 0.0
    sum_funds = 0.0

    for level in levels:
        price, volume = level.price, level.volume
        last = False
        if ceiling > 0:
            if not ceiling_is_funds and ceiling <= sum_volume + volume:
                volume = ceiling - sum_volume
                last = True
            elif ceiling_is_funds and ceiling <= sum_funds + volume * price:
                # reachable only with price > 0, the remainder being positive
                volume = (ceiling - sum_funds) / price
                last = True

        funds = volume * price
        sum_volume += volume
        sum_funds += funds
        rows.append(DepthRow(
            price=price,
            volume=volume,
            funds=funds,
            avg_price=sum_funds / sum_volume if sum_volume else 0.0,
            sum_volume=sum_volume,
            sum_funds=sum_funds,
        ))
        if last:
            break

    return rows
