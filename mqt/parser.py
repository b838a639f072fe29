"""Turn rows extracted from a screener tab into StockData records."""

from mqt.stock_models import (
    Rating,
    StockData,
    parse_f64,
    parse_large_number,
    parse_percentage,
)
from mqt.tabs import TabType


def _keep_text(text):
    return text


_TAB_FIELDS = {
    TabType.OVERVIEW: (
        ("changePercent", "change_percent", parse_percentage),
        ("volume", "volume", parse_large_number),
        ("relativeVolume", "relative_volume", parse_f64),
        ("marketCap", "market_cap", parse_large_number),
        ("peRatio", "pe_ratio", parse_f64),
        ("eps", "eps", parse_f64),
        ("earningsGrowth", "earnings_growth", parse_percentage),
        ("dividendYield", "dividend_yield", parse_percentage),
        ("sector", "sector", _keep_text),
        ("rating", "rating", Rating.parse),
    ),
    TabType.PERFORMANCE: (
        ("changePercent", "change_percent", parse_percentage),
        ("performance1w", "performance_1w", parse_percentage),
        ("performance1m", "performance_1m", parse_percentage),
        ("performance3m", "performance_3m", parse_percentage),
        ("performance6m", "performance_6m", parse_percentage),
        ("performanceYtd", "performance_ytd", parse_percentage),
        ("performance1y", "performance_1y", parse_percentage),
        ("performance5y", "performance_5y", parse_percentage),
        ("performance10y", "performance_10y", parse_percentage),
        ("performanceAll", "performance_all", parse_percentage),
        ("volatility1w", "volatility_1w", parse_f64),
        ("volatility1m", "volatility_1m", parse_f64),
    ),
    TabType.EXTENDED_HOURS: (
        ("preMarketClose", "pre_market_close", parse_f64),
        ("preMarketChange", "pre_market_change", parse_percentage),
        ("preMarketGap", "pre_market_gap", parse_percentage),
        ("preMarketVolume", "pre_market_volume", parse_large_number),
        ("gap", "gap", parse_percentage),
        ("volumeChange", "volume_change", parse_percentage),
        ("postMarketClose", "post_market_close", parse_f64),
        ("postMarketChange", "post_market_change", parse_percentage),
        ("postMarketVolume", "post_market_volume", parse_large_number),
    ),
    TabType.VALUATION: (
        ("marketCapPerf1y", "market_cap_perf_1y", parse_percentage),
        ("pegRatio", "peg_ratio", parse_f64),
        ("priceToSales", "price_to_sales", parse_f64),
        ("priceToBook", "price_to_book", parse_f64),
        ("priceToCashFlow", "price_to_cash_flow", parse_f64),
        ("priceToFreeCashFlow", "price_to_free_cash_flow", parse_f64),
        ("priceToCash", "price_to_cash", parse_f64),
        ("enterpriseValue", "enterprise_value", parse_large_number),
        ("evToRevenue", "ev_to_revenue", parse_f64),
        ("evToEbit", "ev_to_ebit", parse_f64),
        ("evToEbitda", "ev_to_ebitda", parse_f64),
    ),
    TabType.DIVIDENDS: (
        ("dividendsPerShareYearly", "dividends_per_share_yearly", parse_f64),
        ("dividendsPerShareQuarterly", "dividends_per_share_quarterly", parse_f64),
        ("dividendPayoutRatio", "dividend_payout_ratio", parse_percentage),
        ("dividendsPerShareGrowth", "dividends_per_share_growth", parse_percentage),
        ("continuousDividendPayout", "continuous_dividend_payout", parse_large_number),
        ("continuousDividendGrowth", "continuous_dividend_growth", parse_large_number),
    ),
    TabType.PROFITABILITY: (
        ("grossMargin", "gross_margin", parse_percentage),
        ("operatingMargin", "operating_margin", parse_percentage),
        ("profitMargin", "profit_margin", parse_percentage),
        ("pureMargin", "pure_margin", parse_percentage),
        ("freeCashFlowMargin", "free_cash_flow_margin", parse_percentage),
        ("roi", "roi", parse_percentage),
        ("roe", "roe", parse_percentage),
        ("roic", "roic", parse_percentage),
        ("rdRatio", "rd_ratio", parse_percentage),
        ("sgaRatio", "sga_ratio", parse_percentage),
    ),
    TabType.INCOME_STATEMENT: (
        ("totalRevenue", "total_revenue", parse_large_number),
        ("revenueGrowth", "revenue_growth", parse_percentage),
        ("grossProfit", "gross_profit", parse_large_number),
        ("operatingIncome", "operating_income", parse_large_number),
        ("netIncome", "net_income", parse_large_number),
        ("ebitda", "ebitda", parse_large_number),
        ("epsDiluted", "eps_diluted", parse_f64),
        ("epsDilutedGrowth", "eps_diluted_growth", parse_percentage),
    ),
    TabType.BALANCE_SHEET: (
        ("totalAssets", "total_assets", parse_large_number),
        ("totalCurrentAssets", "total_current_assets", parse_large_number),
        ("cashAndShortTerm", "cash_and_short_term", parse_large_number),
        ("totalLiabilities", "total_liabilities", parse_large_number),
        ("totalDebt", "total_debt", parse_large_number),
        ("netDebt", "net_debt", parse_large_number),
        ("totalEquity", "total_equity", parse_large_number),
        ("currentRatio", "current_ratio", parse_f64),
        ("quickRatio", "quick_ratio", parse_f64),
        ("debtToEquity", "debt_to_equity", parse_f64),
        ("cashToDebt", "cash_to_debt", parse_f64),
    ),
    TabType.CASH_FLOW: (
        ("operatingCashFlow", "operating_cash_flow", parse_large_number),
        ("investingCashFlow", "investing_cash_flow", parse_large_number),
        ("financingCashFlow", "financing_cash_flow", parse_large_number),
        ("freeCashFlow", "free_cash_flow", parse_large_number),
        ("capitalExpenditures", "capital_expenditures", parse_large_number),
    ),
    TabType.TECHNICALS: (
        ("technicalRating", "technical_rating", Rating.parse),
        ("maRating", "ma_rating", Rating.parse),
        ("oscillatorsRating", "oscillators_rating", Rating.parse),
        ("rsi14", "rsi_14", parse_f64),
        ("momentum10", "momentum_10", parse_f64),
        ("awesomeOscillator", "awesome_oscillator", parse_f64),
        ("cci20", "cci_20", parse_f64),
        ("stochasticK", "stochastic_k", parse_f64),
        ("stochasticD", "stochastic_d", parse_f64),
        ("candlestickPattern", "candlestick_pattern", _keep_text),
    ),
}


def _text(item, key):
    value = item.get(key)
    return value if isinstance(value, str) else None


def _parse_row(item, tab):
    code = _text(item, "code")
    if code is None:
        return None
    stock = StockData(code=code)

    name = _text(item, "name")
    if name is not None:
        stock.name = name
    price = _text(item, "price")
    if price is not None:
        stock.price = parse_f64(price)

    for key, attr, convert in _TAB_FIELDS[tab]:
        text = _text(item, key)
        if text is not None:
            setattr(stock, attr, convert(text))
    return stock


def parse_stock_data_from_json(js_data, tab):
    """Parse the rows of one tab; rows without a string code are skipped.

    Only string values are read; anything that is not a list yields no records.
    """
    if not isinstance(js_data, list):
        return []
    stocks = []
    for item in js_data:
        if not isinstance(item, dict):
            continue
        stock = _parse_row(item, tab)
        if stock is not None:
            stocks.append(stock)
    return stocks