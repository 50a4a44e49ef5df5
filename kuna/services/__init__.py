"""Public service API."""
from .api import KunaClient, is_supported_market, supported_markets
from .errors import (
    DecodeError,
    HTTPStatusError,
    KunaError,
    MissingCredentials,
    MissingValue,
    ServerError,
    TimeFormatError,
    TransportError,
    TypeMismatch,
)
from .frames import (
    accounts_frame,
    depth_frame,
    history_frame,
    orders_frame,
    running_frame,
    trades_frame,
)
from .model import (
    Account,
    DepthRow,
    HistoryEntry,
    Order,
    OrderBook,
    PriceLevel,
    Stats,
    Summary,
    Trade,
    UserInfo,
)
from .orderbook import aggregate
from .signer import sign
from .stats import running_totals, summarize
from .transport import Transport

__all__ = [
    "KunaClient",
    "Transport",
    "supported_markets",
    "is_supported_market",
    "sign",
    "aggregate",
    "summarize",
    "running_totals",
    "depth_frame",
    "orders_frame",
    "history_frame",
    "trades_frame",
    "running_frame",
    "accounts_frame",
    "Account",
    "DepthRow",
    "HistoryEntry",
    "Order",
    "OrderBook",
    "PriceLevel",
    "Stats",
    "Summary",
    "Trade",
    "UserInfo",
    "KunaError",
    "TransportError",
    "HTTPStatusError",
    "ServerError",
    "DecodeError",
    "MissingValue",
    "TypeMismatch",
    "TimeFormatError",
    "MissingCredentials",
]
