"""Quantitative trading toolkit: stock data models, portfolios, strategies, notifications, an API server and a client."""

__version__ = "0.1.0"