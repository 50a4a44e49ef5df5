"""DataFrame view tests"""

from kuna.services.decoders import decode_history, decode_orders, decode_trades, decode_user_info
from kuna.services.frames import (
    accounts_frame,
    depth_frame,
    history_frame,
    orders_frame,
    running_frame,
    trades_frame,
)
from kuna.services.model import PriceLevel
from kuna.services.orderbook import aggregate
from kuna.services.stats import running_totals
from tests.payloads import history_json, order_json, trade_json


class TestFrames:

    def test_depth_frame(self):
        rows = aggregate([PriceLevel(price=10, volume=5), PriceLevel(price=11, volume=5)], ceiling=7)
        df = depth_frame(rows)
        assert list(df.columns) == ["price", "volume", "funds", "avg_price", "sum_volume", "sum_funds"]
        assert df["sum_volume"].iloc[-1] == 7

    def test_empty_frames_keep_columns(self):
        assert list(depth_frame([]).columns)[:2] == ["price", "volume"]
        assert len(history_frame([])) == 0
        assert "created_at" in history_frame([]).columns

    def test_orders_frame_adds_funds(self):
        orders = decode_orders([order_json(price="10", volume="5", remaining_volume="3", executed_volume="2")])
        df = orders_frame(orders)
        assert df["funds"].iloc[0] == 50
        assert df["remaining_funds"].iloc[0] == 30
        assert df["executed_funds"].iloc[0] == 20

    def test_history_and_trades(self):
        assert history_frame(decode_history([history_json()]))["id"].tolist() == [7]
        assert trades_frame(decode_trades([trade_json()]))["side"].tolist() == ["bid"]

    def test_running_frame(self):
        trades = decode_trades([
            trade_json(id=1, volume="1", funds="10"),
            trade_json(id=2, volume="1", funds="20"),
        ])
        df = running_frame(running_totals(trades))
        assert df["id"].tolist() == [1, 2]
        assert df["sum_funds"].tolist() == [10, 30]

    def test_accounts_frame(self, user_json):
        df = accounts_frame(decode_user_info(user_json))
        assert df["currency"].tolist() == ["uah", "btc"]


class TestPublicSurface:

    def test_frames_exported_from_services(self):
        import kuna.services as services

        for name in ("depth_frame", "orders_frame", "history_frame",
                     "trades_frame", "running_frame", "accounts_frame"):
            assert name in services.__all__
            assert getattr(services, name) is globals()[name]
