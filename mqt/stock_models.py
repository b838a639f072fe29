"""Stock data records, rating values and parsing of screener cell text."""

import math
from dataclasses import dataclass, fields
from enum import Enum

MISSING_VALUE = -404
UNPARSABLE_VALUE = -500.0

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_DASHES = ("-", "—", "−")
_UNIT_SCALES = (("T", 1e12), ("B", 1e9), ("M", 1e6), ("K", 1e3))


class Rating(Enum):
    """Analyst or technical rating."""

    STRONG_BUY = "StrongBuy"
    BUY = "Buy"
    NEUTRAL = "Neutral"
    SELL = "Sell"
    STRONG_SELL = "StrongSell"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, text):
        """Map screener rating text to a Rating; unrecognised text is UNKNOWN."""
        return _RATING_TEXT.get(text.strip(), cls.UNKNOWN)


_RATING_TEXT = {
    "强烈买入": Rating.STRONG_BUY,
    "买入": Rating.BUY,
    "中立": Rating.NEUTRAL,
    "卖出": Rating.SELL,
    "强烈卖出": Rating.STRONG_SELL,
}


@dataclass
class StockData:
    """Everything the screener reports about one stock."""

    code: str = ""
    name: str = ""
    price: float = 0.0

    change_percent: float = 0.0
    volume: int = 0
    relative_volume: float = 0.0
    market_cap: int = 0
    pe_ratio: float = 0.0
    eps: float = 0.0
    earnings_growth: float = 0.0
    dividend_yield: float = 0.0
    sector: str = ""
    rating: Rating = Rating.UNKNOWN

    performance_1w: float = 0.0
    performance_1m: float = 0.0
    performance_3m: float = 0.0
    performance_6m: float = 0.0
    performance_ytd: float = 0.0
    performance_1y: float = 0.0
    performance_5y: float = 0.0
    performance_10y: float = 0.0
    performance_all: float = 0.0
    volatility_1w: float = 0.0
    volatility_1m: float = 0.0

    pre_market_close: float = 0.0
    pre_market_change: float = 0.0
    pre_market_gap: float = 0.0
    pre_market_volume: int = 0
    gap: float = 0.0
    volume_change: float = 0.0
    post_market_close: float = 0.0
    post_market_change: float = 0.0
    post_market_volume: int = 0

    market_cap_perf_1y: float = 0.0
    peg_ratio: float = 0.0
    price_to_sales: float = 0.0
    price_to_book: float = 0.0
    price_to_cash_flow: float = 0.0
    price_to_free_cash_flow: float = 0.0
    price_to_cash: float = 0.0
    enterprise_value: int = 0
    ev_to_revenue: float = 0.0
    ev_to_ebit: float = 0.0
    ev_to_ebitda: float = 0.0

    dividends_per_share_yearly: float = 0.0
    dividends_per_share_quarterly: float = 0.0
    dividend_payout_ratio: float = 0.0
    dividends_per_share_growth: float = 0.0
    continuous_dividend_payout: int = 0
    continuous_dividend_growth: int = 0

    gross_margin: float = 0.0
    operating_margin: float = 0.0
    profit_margin: float = 0.0
    pure_margin: float = 0.0
    free_cash_flow_margin: float = 0.0
    roi: float = 0.0
    roe: float = 0.0
    roic: float = 0.0
    rd_ratio: float = 0.0
    sga_ratio: float = 0.0

    total_revenue: int = 0
    revenue_growth: float = 0.0
    gross_profit: int = 0
    operating_income: int = 0
    net_income: int = 0
    ebitda: int = 0
    eps_diluted: float = 0.0
    eps_diluted_growth: float = 0.0

    total_assets: int = 0
    total_current_assets: int = 0
    cash_and_short_term: int = 0
    total_liabilities: int = 0
    total_debt: int = 0
    net_debt: int = 0
    total_equity: int = 0
    current_ratio: float = 0.0
    quick_ratio: float = 0.0
    debt_to_equity: float = 0.0
    cash_to_debt: float = 0.0

    operating_cash_flow: int = 0
    investing_cash_flow: int = 0
    financing_cash_flow: int = 0
    free_cash_flow: int = 0
    capital_expenditures: int = 0

    technical_rating: Rating = Rating.UNKNOWN
    ma_rating: Rating = Rating.UNKNOWN
    oscillators_rating: Rating = Rating.UNKNOWN
    rsi_14: float = 0.0
    momentum_10: float = 0.0
    awesome_oscillator: float = 0.0
    cci_20: float = 0.0
    stochastic_k: float = 0.0
    stochastic_d: float = 0.0
    candlestick_pattern: str = ""

    def to_dict(self):
        """Plain JSON-ready mapping of every field."""
        return {
            f.name: _encode(getattr(self, f.name)) for f in fields(self)
        }

    @classmethod
    def from_dict(cls, data):
        """Build a record from a mapping holding every field; extra keys are ignored."""
        missing = [f.name for f in fields(cls) if f.name not in data]
        if missing:
            raise ValueError(f"missing fields: {', '.join(missing)}")
        return cls(**{f.name: _decode(f.type, f.name, data[f.name]) for f in fields(cls)})


def _encode(value):
    return value.value if isinstance(value, Rating) else value


def _decode(kind, name, value):
    if kind is Rating:
        try:
            return Rating(value)
        except ValueError:
            raise ValueError(f"invalid rating for {name}: {value!r}") from None
    if kind is str:
        if not isinstance(value, str):
            raise ValueError(f"{name} must be a string")
        return value
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number")
    if kind is int:
        if not isinstance(value, int):
            raise ValueError(f"{name} must be an integer")
        return value
    if not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number")
    return float(value)


def _parse_float(text):
    """Strict float parse: no underscores or embedded whitespace."""
    if not text or "_" in text or any(ch.isspace() for ch in text):
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _sign_and_digits(text):
    sign = -1.0 if text[0] in _DASHES else 1.0
    for mark in ("+", "-", "—", "−"):
        text = text.lstrip(mark)
    return sign, text


def _to_i64(value):
    if math.isnan(value):
        return 0
    if value >= _I64_MAX:
        return _I64_MAX
    if value <= _I64_MIN:
        return _I64_MIN
    return int(value)


def parse_f64(s):
    """Parse screener number text; -404.0 when empty, -500.0 when unreadable."""
    text = s.strip()
    for junk in ("%", ",", "CNY", '"', " "):
        text = text.replace(junk, "")
    if not text or text in _DASHES:
        return float(MISSING_VALUE)
    sign, digits = _sign_and_digits(text)
    value = _parse_float(digits)
    return UNPARSABLE_VALUE if value is None else value * sign


def parse_percentage(s):
    """Parse a percentage as its plain number (12.5% gives 12.5)."""
    return parse_f64(s)


def parse_large_number(s):
    """Parse text with an optional T/B/M/K suffix into an integer; -404 when empty."""
    text = s.strip()
    for junk in (",", "CNY", '"', " "):
        text = text.replace(junk, "")
    if not text or text in _DASHES:
        return MISSING_VALUE
    sign, digits = _sign_and_digits(text)

    for unit, scale in _UNIT_SCALES:
        if unit in digits:
            number = _parse_float(digits.split(unit, 1)[0].strip())
            return 0 if number is None else _to_i64(number * scale * sign)

    number = _parse_float(digits)
    return 0 if number is None else _to_i64(number * sign)


def _is_blank(value):
    if isinstance(value, Rating):
        return value is Rating.UNKNOWN
    if isinstance(value, str):
        return value == ""
    return value == 0


def merge_stock_data(dest, src):
    """Fill every blank field of dest (other than code) with src's non-blank value."""
    for f in fields(dest):
        if f.name == "code":
            continue
        incoming = getattr(src, f.name)
        if _is_blank(getattr(dest, f.name)) and not _is_blank(incoming):
            setattr(dest, f.name, incoming)