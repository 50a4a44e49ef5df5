"""api.py

Thin synchronous REST wrapper around the Kuna.io ``/api/v2`` endpoints.

* Centralises **base-URL** + **API-key** handling so callers can simply use
  `client.order_book("btcuah")`, `client.user_info()` … without repeating
  boilerplate.
* Signs private requests (see :mod:`signer`) with a per-client nonce source.
* Converts the loosely typed JSON answers into frozen domain models via
  :mod:`decoders`, failing loudly on any unexpected shape.

Network I/O is delegated to a single :class:`Transport` created once and
passed in explicitly.
"""

from __future__ import annotations

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
import logging
from datetime import datetime
from typing import Any, Literal

# Project settings helper – returns a dict of env-based config values
from kuna.config import settings

from .decoders import (
    decode_history,
    decode_order,
    decode_order_book,
    decode_orders,
    decode_server_time,
    decode_stats,
    decode_trades,
    decode_user_info,
)
from .errors import MissingCredentials
from .model import DepthRow, HistoryEntry, Order, OrderBook, Stats, Trade, UserInfo
from .orderbook import aggregate, book_side
from .signer import BASE_URL, NonceSource, sign
from .transport import Transport

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Markets
# -----------------------------------------------------------------------------
BTCUAH = "btcuah"
ETHUAH = "ethuah"
SUPPORTED_MARKETS = (BTCUAH, ETHUAH)


def supported_markets() -> tuple[str, ...]:
    """Return the market identifiers this client knows about."""
    return SUPPORTED_MARKETS


def is_supported_market(market: str) -> bool:
    return market in SUPPORTED_MARKETS

# -----------------------------------------------------------------------------
# Client
# -----------------------------------------------------------------------------

class KunaClient:
    """One object per process; every method performs exactly one request
    (except :meth:`cancel_all_orders`) and blocks until it completes."""

    def __init__(
        self,
        transport: Transport,
        access_key: str = "",
        secret_key: str = "",
        base_url: str = BASE_URL,
        nonces: NonceSource | None = None,
    ):
        self.transport = transport
        self.access_key = access_key
        self.secret_key = secret_key
        self.base_url = base_url.rstrip("/")
        self.nonces = nonces or NonceSource()

    @classmethod
    def from_settings(cls, transport: Transport | None = None) -> "KunaClient":
        """Build a client from ``KUNA_*`` environment settings."""
        cfg = settings()
        return cls(
            transport or Transport.from_settings(),
            access_key=cfg["ACCESS_KEY"],
            secret_key=cfg["SECRET_KEY"],
            base_url=cfg["API_URL"],
        )

    # ------------------------------------------------------------------
    # Internal convenience helpers
    # ------------------------------------------------------------------

    def _public(self, path: str) -> Any:
        return self.transport.get(f"{self.base_url}{path}")

    def _private(self, method: Literal["GET", "POST"], path: str,
                 params: list[tuple[str, str]] | None = None) -> Any:
        """Sign and send a request to a private endpoint."""
        if not self.access_key:
            raise MissingCredentials("access key is required")
        if not self.secret_key:
            raise MissingCredentials("secret key is required")
        url = sign(
            method, path, self.access_key, self.secret_key, params,
            tonce=self.nonces.next(), base_url=self.base_url,
        )
        if method == "POST":
            return self.transport.post(url)
        return self.transport.get(url)

    # ------------------------------------------------------------------
    # Public market data
    # ------------------------------------------------------------------

    def server_time(self) -> datetime:
        return decode_server_time(self._public("/api/v2/timestamp"))

    def latest_stats(self, market: str) -> Stats:
        return decode_stats(self._public(f"/api/v2/tickers/{market}"))

    def order_book(self, market: str) -> OrderBook:
        """Return current asks and bids, in server order."""
        return decode_order_book(self._public(f"/api/v2/order_book?market={market}"))

    def trade_history(self, market: str) -> tuple[HistoryEntry, ...]:
        return decode_history(self._public(f"/api/v2/trades?market={market}"))

    def depth(
        self,
        market: str,
        side: Literal["sell", "buy"],
        ceiling: float = 0.0,
        in_funds: bool = False,
    ) -> list[DepthRow]:
        """Fetch the order book and walk one side up to *ceiling*.

        ``side="sell"`` walks the asks, ``side="buy"`` the bids. With
        *in_funds* the ceiling is a quote-currency amount.
        """
        if side not in ("sell", "buy"):
            raise ValueError(f"unknown side {side!r}: expected 'sell' or 'buy'")
        if ceiling < 0:
            raise ValueError(f"invalid limit {ceiling}: must not be negative")
        book = self.order_book(market)
        return aggregate(book_side(book, side), ceiling, in_funds)

    # ------------------------------------------------------------------
    # Private account data
    # ------------------------------------------------------------------

    def user_info(self) -> UserInfo:
        """Return the user's e-mail, activation flag and balances."""
        return decode_user_info(self._private("GET", "/api/v2/members/me"))

    def user_orders(self, market: str) -> tuple[Order, ...]:
        """Return the user's active orders on *market*."""
        return decode_orders(self._private("GET", "/api/v2/orders", [("market", market)]))

    def user_trades(self, market: str) -> tuple[Trade, ...]:
        return decode_trades(self._private("GET", "/api/v2/trades/my", [("market", market)]))

    # ------------------------------------------------------------------
    # Trading
    # ------------------------------------------------------------------

    def new_order(
        self,
        market: str,
        side: Literal["buy", "sell"],
        volume: float,
        price: float,
        *,
        in_funds: bool = False,
    ) -> Order:
        """Place a limit order and return it as registered by the server.

        Parameters
        ----------
        side : {"buy", "sell"}
        volume : float
            Amount in base currency, or in quote currency when *in_funds*
            is set (then converted with ``volume / price``).
        price : float
            Price for one unit of base currency.
        """
        side = side.strip().lower()  # type: ignore[assignment]
        if side not in ("buy", "sell"):
            raise ValueError(f"invalid side {side!r}. Valid values are: sell, buy")
        if in_funds:
            if price <= 0:
                raise ValueError(f"invalid price {price}: must be positive")
            volume /= price
        logger.info("placing %s order on %s: %f @ %f", side, market, volume, price)
        data = self._private("POST", "/api/v2/orders", [
            ("market", market),
            ("price", f"{price:f}"),
            ("side", side),
            ("volume", f"{volume:f}"),
        ])
        return decode_order(data)

    def cancel_order(self, order_id: int) -> Order:
        """Cancel one order by id and return its final state."""
        logger.info("cancelling order %d", order_id)
        return decode_order(self._private("POST", "/api/v2/order/delete", [("id", f"{order_id:d}")]))

    def cancel_all_orders(self, market: str) -> list[Order]:
        """Cancel every active order on *market*, one request per order.

        Stops at the first failure; orders cancelled before it stay cancelled.
        """
        return [self.cancel_order(order.id) for order in self.user_orders(market)]
