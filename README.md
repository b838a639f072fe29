# mqt

A compact quantitative trading toolkit. It provides:

- stock screener data models with tolerant number parsing (`mqt.stock_models`)
  and a parser that turns per-tab screener rows into `StockData` records
  (`mqt.parser`, `mqt.tabs`);
- saving, loading and merging of stock data sets (`mqt.stock_io`);
- portfolios, positions and buy/sell transactions with cash and holding checks
  (`mqt.portfolio`), and transactions priced from an HTTP price endpoint
  (`mqt.position_manager`);
- strategy parameters, signals, a momentum and a mean-reversion strategy, a
  strategy registry and a simulated backtest (`mqt.strategy_models`,
  `mqt.strategies`, `mqt.backtest`);
- ntfy push notification messages (`mqt.ntfy`);
- an HTTP API server (`mqt.app`) and an interactive command-line client
  (`mqt.client`).

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
mqt-server
```

By default the server listens on `127.0.0.1:8080`; `--host` and `--port`
change that. Every response allows any origin, method and header (CORS). The
API lives under `/api`:

- `GET /api/status` – `{"status": "running", "uptime": "D days, H hours, M minutes", "version": ...}`
- `GET /api/health` – the text `OK`
- `GET /api/position/list` – names of all portfolios
- `POST /api/position/query_portfolio` – body `{"name": ...}`; name, cash
  balance and positions of a portfolio
- `POST /api/position/add_portfolio` – body `{"name": ..., "cash_balance": ...}`
- `POST /api/position/remove_portfolio` – body `{"name": ...}`
- `POST /api/position/add`, `POST /api/position/remove` – body
  `{"portfolio": ..., "code": ..., "amount": ...}`; buys or sells at the price
  returned by `GET <base_url>/stockdata/price?code=<code>`
- `GET /api/strategy/list`, `GET /api/strategy/detail/<name>`
- `POST /api/strategy/run` – body `{"name": ...}`
- `POST /api/strategy/backtest` – body `{"name": ..., "initial_capital": ...}`
  (`initial_capital` optional, default 100000)
- `GET /api/strategy/backtest_result/<name>`

Errors come back as HTTP 400 with `{"error": "..."}`. The server knows two
strategies out of the box: `动量策略` and `均值回归策略`.

The application can also be built in code with `mqt.app.create_app()`, which
accepts optional `ServerState`, `PositionState` and `StrategyState` objects.

## Running the client

```
mqt-client
```

`--base-url` points the client at another server (default
`http://127.0.0.1:8080/api`). Type `help` at the prompt to list commands, for
example:

```
> position add_portfolio main 100000
> position query_portfolio main
> strategy list
> strategy backtest 动量策略
> exit
```

A failed request or an unreadable number ends the client with exit status 1.

## Using the library

```python
from mqt.portfolio import Portfolio, Transaction, TransactionType

portfolio = Portfolio("main", 10000.0)
portfolio.add_transaction(Transaction("SH600000", TransactionType.BUY, 100, 10.5))
print(portfolio.info())
```

`Portfolio.add_transaction` raises `mqt.portfolio.PortfolioError` when cash or
holdings are insufficient.

```python
from mqt.stock_models import parse_f64, parse_large_number

parse_f64("-4.16 CNY")      # -4.16
parse_f64("—")              # -404.0 (missing value)
parse_large_number("1.5B")  # 1500000000
```

```python
from mqt.parser import parse_stock_data_from_json
from mqt.stock_io import merge_stock_data_sources, save_stock_data
from mqt.tabs import TabType

overview = parse_stock_data_from_json(
    [{"code": "SH600000", "name": "Sample", "price": "10.50", "marketCap": "300M"}],
    TabType.OVERVIEW,
)
merged = merge_stock_data_sources([overview])
filename = save_stock_data(merged, "output")  # output/stock_data_<timestamp>.json
```

```python
from mqt.ntfy import warning_message

message = warning_message("alerts", "Drawdown", "Portfolio dropped 5%")
message.send("https://ntfy.example.com")
```

## What the package does not do

- It does not collect stock data. There is no screener scraping and no browser
  automation; the parser only works on rows that are handed to it.
- The server has no `/api/stockdata/...` endpoints. The client's `stockdata`
  commands, and the server's `position add` / `position remove`, need some
  other service to answer `<base_url>/stockdata/price`; without one, trades
  fail with a price lookup error.
- Portfolios and backtest results are kept in memory only and are lost when
  the server stops.
- Backtests are simulated: they return fixed figures rather than replaying
  market data, and `strategy run` only reports the strategy as started.
- The mean-reversion strategy compares each price with itself, so it produces
  no signals for positive prices.