"""HTTP endpoints for listing, running and backtesting strategies."""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from flask import Blueprint, jsonify, request

from mqt.strategy_models import BacktestResult, StrategyParams, StrategyType

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_CAPITAL = 100000.0


def _default_strategies():
    strategies = {}
    for params in (
        StrategyParams("动量策略", StrategyType.MOMENTUM),
        StrategyParams("均值回归策略", StrategyType.MEAN_REVERSION),
    ):
        strategies[params.name] = params
    return strategies


@dataclass
class StrategyState:
    """Known strategies and the latest backtest result of each."""

    strategies: dict = field(default_factory=_default_strategies)
    backtest_results: dict = field(default_factory=dict)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)


class _InvalidRequest(Exception):
    """The request body does not have the expected shape."""


def _json_body():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise _InvalidRequest("请求体必须是JSON对象")
    name = body.get("name")
    if not isinstance(name, str):
        raise _InvalidRequest("字段 name 必须是字符串")
    return body


def _optional(body, key, check, message):
    value = body.get(key)
    if value is not None and not check(value):
        raise _InvalidRequest(message)
    return value


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _error(message):
    return jsonify({"error": message}), 400


def create_strategy_blueprint(state):
    """Build the strategy endpoints over state."""
    blueprint = Blueprint("strategy", __name__)

    @blueprint.errorhandler(_InvalidRequest)
    def _invalid(exc):
        return _error(str(exc))

    @blueprint.get("/list")
    def list_strategies():
        logger.info("获取所有策略")
        with state.lock:
            return jsonify([s.to_dict() for s in state.strategies.values()])

    @blueprint.get("/detail/<name>")
    def get_strategy(name):
        logger.info("获取策略详情: %s", name)
        with state.lock:
            strategy = state.strategies.get(name)
            if strategy is None:
                return _error(f"未找到策略: {name}")
            return jsonify(strategy.to_dict())

    @blueprint.post("/run")
    def run_strategy():
        name = _json_body()["name"]
        logger.info("运行策略: %s", name)
        with state.lock:
            strategy = state.strategies.get(name)
            if strategy is None:
                return _error(f"未找到策略: {name}")
            return jsonify(
                {
                    "success": True,
                    "message": f"策略 {name} 已启动",
                    "strategy": strategy.to_dict(),
                }
            )

    @blueprint.post("/backtest")
    def backtest_strategy():
        body = _json_body()
        name = body["name"]
        for key in ("start_date", "end_date"):
            _optional(body, key, lambda v: isinstance(v, str), f"字段 {key} 必须是字符串")
        capital = _optional(body, "initial_capital", _is_number, "字段 initial_capital 必须是数字")
        logger.info("回测策略: %s", name)
        with state.lock:
            strategy = state.strategies.get(name)
            if strategy is None:
                return _error(f"未找到策略: {name}")
            now = datetime.now(timezone.utc)
            result = BacktestResult(
                strategy_name=strategy.name,
                strategy_type=strategy.strategy_type,
                start_date=now - timedelta(days=30),
                end_date=now,
                initial_capital=DEFAULT_INITIAL_CAPITAL if capital is None else float(capital),
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
            )
            state.backtest_results[strategy.name] = result
        return jsonify(result.to_dict())

    @blueprint.get("/backtest_result/<name>")
    def get_backtest_result(name):
        logger.info("获取回测结果: %s", name)
        with state.lock:
            result = state.backtest_results.get(name)
            if result is None:
                return _error(f"未找到策略 {name} 的回测结果")
            return jsonify(result.to_dict())

    return blueprint