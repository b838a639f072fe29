"""HTTP endpoints for managing portfolios and their positions."""

import logging
import threading
from dataclasses import dataclass, field

from flask import Blueprint, jsonify, request

from mqt.constants import BASE_URL
from mqt.portfolio import Portfolio, PortfolioError, TransactionType
from mqt.position_manager import PositionManager, PriceLookupError

logger = logging.getLogger(__name__)


@dataclass
class PositionState:
    """Portfolios held by the server, guarded by a lock."""

    portfolios: list = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def find(self, name):
        """Return the portfolio called name, or None."""
        return next((p for p in self.portfolios if p.name == name), None)


class _InvalidRequest(Exception):
    """The request body does not have the expected shape."""


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _read_body(**spec):
    """Read the JSON body and return the named fields, checked by kind."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise _InvalidRequest("请求体必须是JSON对象")
    values = {}
    for key, kind in spec.items():
        if key not in body:
            raise _InvalidRequest(f"缺少字段: {key}")
        value = body[key]
        if kind is str:
            if not isinstance(value, str):
                raise _InvalidRequest(f"字段 {key} 必须是字符串")
            values[key] = value
        else:
            if not _is_number(value):
                raise _InvalidRequest(f"字段 {key} 必须是数字")
            values[key] = float(value)
    return values


def _error(message):
    return jsonify({"error": message}), 400


def create_position_blueprint(state, base_url=BASE_URL):
    """Build the position endpoints over state; prices come from base_url."""
    blueprint = Blueprint("position", __name__)

    @blueprint.errorhandler(_InvalidRequest)
    def _invalid(exc):
        return _error(str(exc))

    @blueprint.get("/list")
    def list_positions():
        logger.info("获取所有持仓")
        with state.lock:
            names = [p.name for p in state.portfolios]
        return jsonify(names)

    @blueprint.post("/query_portfolio")
    def get_portfolio():
        logger.info("获取投资组合信息")
        body = _read_body(name=str)
        with state.lock:
            portfolio = state.find(body["name"])
            if portfolio is None:
                return _error("投资组合不存在")
            return jsonify(
                {
                    "name": portfolio.name,
                    "cash_balance": portfolio.cash_balance,
                    "positions": [p.to_dict() for p in portfolio.positions.values()],
                }
            )

    @blueprint.post("/add_portfolio")
    def add_portfolio():
        body = _read_body(name=str, cash_balance=float)
        logger.info("添加投资组合: %s", body["name"])
        with state.lock:
            if state.find(body["name"]) is not None:
                return _error("投资组合已存在")
            state.portfolios.append(Portfolio(body["name"], body["cash_balance"]))
        return jsonify({"success": True})

    @blueprint.post("/remove_portfolio")
    def remove_portfolio():
        body = _read_body(name=str)
        logger.info("删除投资组合: %s", body["name"])
        with state.lock:
            if state.find(body["name"]) is None:
                return _error("投资组合不存在")
            state.portfolios[:] = [p for p in state.portfolios if p.name != body["name"]]
        return jsonify({"success": True})

    def _trade(transaction_type, success_message, failure_label):
        body = _read_body(portfolio=str, code=str, amount=float)
        logger.info(
            "%s: portfolio: %s, code: %s, amount: %s",
            failure_label[:4],
            body["portfolio"],
            body["code"],
            body["amount"],
        )
        with state.lock:
            portfolio = state.find(body["portfolio"])
            if portfolio is None:
                return _error("投资组合不存在")
            manager = PositionManager(portfolio, base_url=base_url)
            try:
                transaction = manager.new_transaction(
                    body["code"], transaction_type, body["amount"]
                )
            except PriceLookupError as exc:
                logger.error("%s: %s", failure_label, exc)
                return _error(str(exc))
            try:
                portfolio.add_transaction(transaction)
            except PortfolioError as exc:
                logger.error("%s: %s", failure_label, exc)
                return _error(str(exc))
        return jsonify({"success": True, "message": success_message})

    @blueprint.post("/add")
    def add_position():
        return _trade(TransactionType.BUY, "持仓添加成功", "添加持仓失败")

    @blueprint.post("/remove")
    def remove_position():
        return _trade(TransactionType.SELL, "持仓减少成功", "减少持仓失败")

    return blueprint