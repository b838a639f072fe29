"""Creating trades priced from the server's stock-price endpoint."""

import requests

from mqt.constants import BASE_URL
from mqt.portfolio import Transaction


class PriceLookupError(Exception):
    """The current price of a stock could not be obtained."""


class PositionManager:
    """Builds transactions for a portfolio using live prices."""

    def __init__(self, portfolio, base_url=BASE_URL, session=None):
        self.portfolio = portfolio
        self.base_url = base_url
        self.session = session

    def _fetch_price(self, code):
        http = self.session if self.session is not None else requests
        try:
            response = http.get(f"{self.base_url}/stockdata/price", params={"code": code})
        except requests.RequestException as exc:
            raise PriceLookupError(str(exc)) from exc

        if not response.ok:
            raise PriceLookupError(f"获取价格失败: {response.status_code} {response.reason}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise PriceLookupError(str(exc)) from exc

        if isinstance(payload, dict):
            raise PriceLookupError("返回数据格式错误: map")
        if isinstance(payload, bool) or not isinstance(payload, (int, float)):
            raise PriceLookupError("返回数据格式错误")
        try:
            return float(payload)
        except OverflowError as exc:
            raise PriceLookupError("价格不是有效的数字") from exc

    def new_transaction(self, code, transaction_type, amount):
        """Return a transaction for code at its current price."""
        price = self._fetch_price(code)
        return Transaction(
            code=code,
            transaction_type=transaction_type,
            amount=amount,
            price=price,
        )