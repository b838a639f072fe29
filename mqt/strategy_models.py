"""Strategy parameters, signals, market snapshots and backtest results."""

import copy
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


def _now():
    return datetime.now(timezone.utc)


def _iso(moment):
    return None if moment is None else moment.isoformat().replace("+00:00", "Z")


class StrategyType(Enum):
    MOMENTUM = "Momentum"
    MEAN_REVERSION = "MeanReversion"
    PAIR_TRADING = "PairTrading"
    FACTOR_MODEL = "FactorModel"
    CUSTOM = "Custom"


class SignalAction(Enum):
    BUY = "Buy"
    SELL = "Sell"
    HOLD = "Hold"


@dataclass
class StrategyParams:
    """General settings, risk limits and free-form parameters of a strategy."""

    name: str
    strategy_type: StrategyType
    description: str = ""
    enabled: bool = False
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)
    max_position_size: float = 0.1
    max_drawdown: float = 0.2
    stop_loss: float = 0.05
    take_profit: float = 0.1
    params: dict = field(default_factory=dict)

    def get_param(self, key, default=None):
        """Return a copy of the parameter stored under key, or default."""
        if key not in self.params:
            return default
        return copy.deepcopy(self.params[key])

    def set_param(self, key, value):
        """Store a JSON-compatible value; raise TypeError if it is not one."""
        try:
            stored = json.loads(json.dumps(value))
        except (TypeError, ValueError) as exc:
            raise TypeError(f"parameter {key!r} is not JSON-serialisable: {exc}") from exc
        self.params[key] = stored
        self.updated_at = _now()

    def to_dict(self):
        return {
            "name": self.name,
            "description": self.description,
            "strategy_type": self.strategy_type.value,
            "enabled": self.enabled,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
            "max_position_size": self.max_position_size,
            "max_drawdown": self.max_drawdown,
            "stop_loss": self.stop_loss,
            "take_profit": self.take_profit,
            "params": copy.deepcopy(self.params),
        }


@dataclass
class BacktestTrade:
    """One round trip made during a backtest."""

    code: str
    entry_date: datetime
    entry_price: float
    entry_amount: float
    exit_date: datetime | None = None
    exit_price: float | None = None
    exit_amount: float | None = None
    profit_loss: float | None = None
    profit_loss_percent: float | None = None
    exit_reason: str | None = None

    def to_dict(self):
        return {
            "code": self.code,
            "entry_date": _iso(self.entry_date),
            "entry_price": self.entry_price,
            "entry_amount": self.entry_amount,
            "exit_date": _iso(self.exit_date),
            "exit_price": self.exit_price,
            "exit_amount": self.exit_amount,
            "profit_loss": self.profit_loss,
            "profit_loss_percent": self.profit_loss_percent,
            "exit_reason": self.exit_reason,
        }


@dataclass
class BacktestResult:
    """Performance figures and trades of one backtest run."""

    strategy_name: str
    strategy_type: StrategyType
    start_date: datetime
    end_date: datetime
    initial_capital: float
    final_capital: float
    total_return: float
    annualized_return: float
    sharpe_ratio: float
    max_drawdown: float
    win_rate: float
    profit_factor: float
    total_trades: int
    winning_trades: int
    losing_trades: int
    avg_profit: float
    avg_loss: float
    equity_curve: list = field(default_factory=list)
    trades: list = field(default_factory=list)

    def to_dict(self):
        return {
            "strategy_name": self.strategy_name,
            "strategy_type": self.strategy_type.value,
            "start_date": _iso(self.start_date),
            "end_date": _iso(self.end_date),
            "initial_capital": self.initial_capital,
            "final_capital": self.final_capital,
            "total_return": self.total_return,
            "annualized_return": self.annualized_return,
            "sharpe_ratio": self.sharpe_ratio,
            "max_drawdown": self.max_drawdown,
            "win_rate": self.win_rate,
            "profit_factor": self.profit_factor,
            "total_trades": self.total_trades,
            "winning_trades": self.winning_trades,
            "losing_trades": self.losing_trades,
            "avg_profit": self.avg_profit,
            "avg_loss": self.avg_loss,
            "equity_curve": [[_iso(moment), value] for moment, value in self.equity_curve],
            "trades": [trade.to_dict() for trade in self.trades],
        }


@dataclass
class Signal:
    """A trading suggestion for one stock; strength runs from 0 to 1."""

    code: str
    timestamp: datetime
    action: SignalAction
    price: float | None
    amount: float | None
    reason: str
    strength: float


@dataclass
class StockSnapshot:
    """Quote of one stock at a moment in time."""

    code: str
    name: str = ""
    price: float = 0.0
    open: float = 0.0
    high: float = 0.0
    low: float = 0.0
    volume: float = 0.0
    turnover: float = 0.0
    change_percent: float = 0.0


@dataclass
class MarketData:
    """Snapshots of many stocks keyed by code."""

    timestamp: datetime = field(default_factory=_now)
    stocks: dict = field(default_factory=dict)