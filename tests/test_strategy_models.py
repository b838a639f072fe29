import json
from datetime import datetime, timedelta, timezone

import pytest

from mqt.strategy_models import (
    BacktestResult,
    BacktestTrade,
    MarketData,
    SignalAction,
    StockSnapshot,
    StrategyParams,
    StrategyType,
)


def test_enum_values_follow_wire_names():
    assert StrategyType("MeanReversion") is StrategyType.MEAN_REVERSION
    assert SignalAction("Hold") is SignalAction.HOLD


def test_params_defaults():
    params = StrategyParams("x", StrategyType.CUSTOM)
    assert params.enabled is False
    assert params.description == ""
    assert params.params == {}
    assert params.created_at.tzinfo is not None


def test_set_and_get_param_round_trip():
    params = StrategyParams("x", StrategyType.MOMENTUM)
    before = params.updated_at
    params.set_param("window", [1, 2, 3])
    assert params.get_param("window") == [1, 2, 3]
    assert params.updated_at >= before


def test_get_param_returns_copy():
    params = StrategyParams("x", StrategyType.MOMENTUM)
    params.set_param("window", [1, 2])
    params.get_param("window").append(99)
    assert params.get_param("window") == [1, 2]


def test_get_param_missing_gives_default():
    params = StrategyParams("x", StrategyType.MOMENTUM)
    assert params.get_param("absent") is None
    assert params.get_param("absent", "fallback") == "fallback"


def test_set_param_rejects_unserialisable():
    params = StrategyParams("x", StrategyType.MOMENTUM)
    with pytest.raises(TypeError):
        params.set_param("bad", object())
    assert "bad" not in params.params


def test_params_to_dict():
    params = StrategyParams("动量策略", StrategyType.MOMENTUM)
    params.set_param("threshold", 0.05)
    data = params.to_dict()
    assert data["strategy_type"] == "Momentum"
    assert data["name"] == "动量策略"
    assert data["params"] == {"threshold": 0.05}
    assert data["created_at"].endswith("Z")
    assert json.loads(json.dumps(data)) == data


def test_trade_to_dict_open_trade():
    entry = datetime(2024, 1, 2, tzinfo=timezone.utc)
    trade = BacktestTrade(code="SH000001", entry_date=entry, entry_price=3000.0, entry_amount=1.0)
    data = trade.to_dict()
    assert data["exit_date"] is None
    assert data["exit_reason"] is None
    assert datetime.fromisoformat(data["entry_date"].replace("Z", "+00:00")) == entry


def test_result_to_dict_equity_curve():
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    end = start + timedelta(days=30)
    result = BacktestResult(
        strategy_name="s",
        strategy_type=StrategyType.CUSTOM,
        start_date=start,
        end_date=end,
        initial_capital=100000.0,
        final_capital=110000.0,
        total_return=0.1,
        annualized_return=0.12,
        sharpe_ratio=1.5,
        max_drawdown=0.05,
        win_rate=0.6,
        profit_factor=1.8,
        total_trades=20,
        winning_trades=12,
        losing_trades=8,
        avg_profit=1000.0,
        avg_loss=-500.0,
        equity_curve=[(start, 100000.0)],
    )
    data = result.to_dict()
    assert data["strategy_type"] == "Custom"
    assert data["equity_curve"][0][1] == 100000.0
    assert data["equity_curve"][0][0] == data["start_date"]
    assert data["trades"] == []


def test_market_data_holds_snapshots():
    snap = StockSnapshot(code="SH000001", price=3000.0)
    data = MarketData(stocks={snap.code: snap})
    assert data.stocks["SH000001"].price == 3000.0
    assert data.timestamp.tzinfo is not None