"""Trading strategies and a registry of them."""

import logging
import math
from abc import ABC, abstractmethod

from mqt.strategy_models import Signal, SignalAction, StrategyParams, StrategyType

logger = logging.getLogger(__name__)


def _display_number(value):
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return repr(value)


class Strategy(ABC):
    """A strategy turns market data into trading signals."""

    def __init__(self, params):
        self.params = params

    @property
    def name(self):
        return self.params.name

    @property
    def strategy_type(self):
        return self.params.strategy_type

    @property
    def enabled(self):
        return self.params.enabled

    @enabled.setter
    def enabled(self, value):
        self.params.enabled = value

    @abstractmethod
    def generate_signals(self, data):
        """Return the list of signals for the given MarketData."""


class MomentumStrategy(Strategy):
    """Buys rising stocks and sells falling ones past a threshold."""

    def __init__(self, name):
        params = StrategyParams(name, StrategyType.MOMENTUM)
        params.set_param("lookback_period", 20)
        params.set_param("threshold", 0.05)
        super().__init__(params)
        self.lookback_period = 20
        self.threshold = 0.05

    def generate_signals(self, data):
        logger.info("生成动量策略信号")
        percent = _display_number(self.threshold * 100.0)
        signals = []
        for code, snapshot in data.stocks.items():
            if snapshot.change_percent > self.threshold:
                action, reason = SignalAction.BUY, f"涨幅超过阈值 {percent}%"
                strength = snapshot.change_percent / 10.0
            elif snapshot.change_percent < -self.threshold:
                action, reason = SignalAction.SELL, f"跌幅超过阈值 {percent}%"
                strength = -snapshot.change_percent / 10.0
            else:
                continue
            signals.append(
                Signal(
                    code=code,
                    timestamp=data.timestamp,
                    action=action,
                    price=snapshot.price,
                    amount=100.0,
                    reason=reason,
                    strength=strength,
                )
            )
        return signals


class MeanReversionStrategy(Strategy):
    """Trades against prices that stray too far from their mean."""

    def __init__(self, name):
        params = StrategyParams(name, StrategyType.MEAN_REVERSION)
        params.set_param("ma_period", 20)
        params.set_param("std_dev_multiplier", 2.0)
        super().__init__(params)
        self.ma_period = 20
        self.std_dev_multiplier = 2.0

    def generate_signals(self, data):
        logger.info("生成均值回归策略信号")
        signals = []
        for code, snapshot in data.stocks.items():
            # The current price stands in for the mean.
            if snapshot.price > snapshot.price * 1.1:
                action, reason = SignalAction.SELL, "价格高于均值过多"
            elif snapshot.price < snapshot.price * 0.9:
                action, reason = SignalAction.BUY, "价格低于均值过多"
            else:
                continue
            signals.append(
                Signal(
                    code=code,
                    timestamp=data.timestamp,
                    action=action,
                    price=snapshot.price,
                    amount=100.0,
                    reason=reason,
                    strength=0.7,
                )
            )
        return signals


class StrategyFactory:
    """Registry of strategies by name, pre-loaded with the default ones."""

    def __init__(self):
        self._strategies = {}
        self.register_strategy(MomentumStrategy("动量策略"))
        self.register_strategy(MeanReversionStrategy("均值回归策略"))

    def register_strategy(self, strategy):
        """Add or replace the strategy under its name."""
        self._strategies[strategy.name] = strategy

    def get_strategy(self, name):
        """Return the named strategy, or None."""
        return self._strategies.get(name)

    def get_strategy_names(self):
        return list(self._strategies)