"""Holdings, transactions and portfolios."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
import math


class PortfolioError(Exception):
    """A transaction that the portfolio cannot accept."""


class TransactionType(Enum):
    BUY = "Buy"
    SELL = "Sell"


def _now():
    return datetime.now(timezone.utc)


def _iso(moment):
    return moment.isoformat().replace("+00:00", "Z")


def _display_number(value):
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value == int(value):
        return str(int(value))
    text = repr(value)
    if "e" in text:
        text = format(Decimal(text), "f")
    return text


def _display_time(moment):
    text = moment.strftime("%Y-%m-%d %H:%M:%S")
    micros = moment.microsecond
    if micros:
        if micros % 1000 == 0:
            text += f".{micros // 1000:03d}"
        else:
            text += f".{micros:06d}"
    return text + " UTC"


@dataclass
class Transaction:
    """One buy or sell of a stock."""

    code: str
    transaction_type: TransactionType
    amount: float
    price: float
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=_now)
    fee: float | None = None
    note: str | None = None

    def total_value(self):
        """Amount times price."""
        return self.amount * self.price

    def to_dict(self):
        return {
            "id": self.id,
            "code": self.code,
            "transaction_type": self.transaction_type.value,
            "amount": self.amount,
            "price": self.price,
            "timestamp": _iso(self.timestamp),
            "fee": self.fee,
            "note": self.note,
        }


@dataclass
class Position:
    """A holding of one stock together with the trades behind it."""

    code: str
    name: str
    amount: float
    cost: float
    current_price: float | None = None
    last_update: datetime = field(default_factory=_now)
    transactions: list = field(default_factory=list)

    def info(self):
        """One-line human-readable summary."""
        price = self.current_price if self.current_price is not None else 0.0
        return (
            f"股票代码: {self.code}, 股票名称: {self.name}, "
            f"持仓数量: {_display_number(self.amount)}, "
            f"持仓成本: {_display_number(self.cost)}, "
            f"当前价格: {_display_number(price)}, "
            f"最后更新时间: {_display_time(self.last_update)}, "
            f"交易记录: {len(self.transactions)}"
        )

    def market_value(self):
        """Current value, or None when no price is known."""
        if self.current_price is None:
            return None
        return self.current_price * self.amount

    def total_cost(self):
        return self.cost * self.amount

    def profit_loss(self):
        value = self.market_value()
        return None if value is None else value - self.total_cost()

    def profit_loss_percent(self):
        total_cost = self.total_cost()
        if total_cost == 0.0:
            return None
        profit = self.profit_loss()
        return None if profit is None else profit / total_cost * 100.0

    def add_transaction(self, transaction):
        """Record a trade and recompute amount and average cost from all trades."""
        self.transactions.append(transaction)
        self._recompute()

    def _recompute(self):
        total_amount = 0.0
        total_cost = 0.0
        for trade in self.transactions:
            if trade.transaction_type is TransactionType.BUY:
                total_amount += trade.amount
                total_cost += trade.amount * trade.price
            else:
                # Selling does not reduce the cost basis; only the divisor shrinks.
                total_amount -= trade.amount
        self.amount = total_amount
        self.cost = total_cost / total_amount if total_amount > 0.0 else 0.0
        self.last_update = _now()

    def to_dict(self):
        return {
            "code": self.code,
            "name": self.name,
            "amount": self.amount,
            "cost": self.cost,
            "current_price": self.current_price,
            "last_update": _iso(self.last_update),
            "transactions": [t.to_dict() for t in self.transactions],
        }


@dataclass
class Portfolio:
    """Cash plus a set of positions keyed by stock code."""

    name: str
    cash_balance: float
    positions: dict = field(default_factory=dict)
    created_at: datetime = field(default_factory=_now)
    last_update: datetime = field(default_factory=_now)

    def info(self):
        """Multi-line human-readable summary including every position."""
        position_infos = "\n".join(p.info() for p in self.positions.values())
        percent = self.total_profit_loss_percent()
        return (
            f"组合名称: {self.name}, "
            f"现金余额: {_display_number(self.cash_balance)}, "
            f"持仓数量: {len(self.positions)}, "
            f"总市值: {_display_number(self.total_market_value())}, "
            f"总成本: {_display_number(self.total_cost())}, "
            f"总盈亏: {_display_number(self.total_profit_loss())}, "
            f"总盈亏比例: {_display_number(percent if percent is not None else 0.0)}"
            f"\n持仓信息:\n{position_infos}"
        )

    def total_market_value(self):
        """Cash plus the value of every position with a known price."""
        values = (p.market_value() for p in self.positions.values())
        return sum(v for v in values if v is not None) + self.cash_balance

    def total_cost(self):
        return sum(p.total_cost() for p in self.positions.values()) + self.cash_balance

    def total_profit_loss(self):
        return self.total_market_value() - self.total_cost()

    def total_profit_loss_percent(self):
        total_cost = self.total_cost()
        if total_cost == 0.0:
            return None
        return self.total_profit_loss() / total_cost * 100.0

    def add_position(self, position):
        """Insert or replace the position for its code."""
        self.positions[position.code] = position
        self.last_update = _now()

    def remove_position(self, code):
        """Remove and return the position for code, or None if there is none."""
        position = self.positions.pop(code, None)
        if position is not None:
            self.last_update = _now()
        return position

    def add_transaction(self, transaction):
        """Apply a trade to cash and positions; raise PortfolioError if it cannot be made."""
        code = transaction.code
        if transaction.transaction_type is TransactionType.BUY:
            cost = transaction.total_value()
            if cost > self.cash_balance:
                raise PortfolioError("现金余额不足")
            self.cash_balance -= cost
            position = self.positions.get(code)
            if position is None:
                position = Position(
                    code=code,
                    name=f"Unknown Stock {code}",
                    amount=transaction.amount,
                    cost=transaction.price,
                )
                self.positions[code] = position
            position.add_transaction(transaction)
        else:
            position = self.positions.get(code)
            if position is None:
                raise PortfolioError("没有该股票的持仓")
            if position.amount < transaction.amount:
                raise PortfolioError("持仓数量不足")
            self.cash_balance += transaction.total_value()
            position.add_transaction(transaction)
            if position.amount == 0.0:
                del self.positions[code]
        self.last_update = _now()