"""Screener tabs that stock data is read from."""

from enum import Enum


class TabType(Enum):
    """A tab of the stock screener, valued by its page identifier."""

    OVERVIEW = "overview"
    PERFORMANCE = "performance"
    EXTENDED_HOURS = "extendedHours"
    VALUATION = "valuation"
    DIVIDENDS = "dividends"
    PROFITABILITY = "profitability"
    INCOME_STATEMENT = "incomeStatement"
    BALANCE_SHEET = "balanceSheet"
    CASH_FLOW = "cashFlow"
    TECHNICALS = "technicals"

    def tab_id(self):
        """Identifier of the tab's button on the page."""
        return self.value

    def label(self):
        """Human-readable name of the tab."""
        return _LABELS[self]


_LABELS = {
    TabType.OVERVIEW: "概览",
    TabType.PERFORMANCE: "表现",
    TabType.EXTENDED_HOURS: "延长时段",
    TabType.VALUATION: "估值",
    TabType.DIVIDENDS: "股利",
    TabType.PROFITABILITY: "盈利能力",
    TabType.INCOME_STATEMENT: "损益表",
    TabType.BALANCE_SHEET: "资产负债表",
    TabType.CASH_FLOW: "现金流",
    TabType.TECHNICALS: "技术指标",
}