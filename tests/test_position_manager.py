import pytest
import requests
import responses
from responses import matchers

from mqt.constants import BASE_URL
from mqt.portfolio import Portfolio, TransactionType
from mqt.position_manager import PositionManager, PriceLookupError

PRICE_URL = f"{BASE_URL}/stockdata/price"


def _manager(**kwargs):
    return PositionManager(Portfolio(name="main", cash_balance=100.0), **kwargs)


def test_new_transaction_uses_server_price():
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.GET,
            PRICE_URL,
            json=12.5,
            match=[matchers.query_param_matcher({"code": "SH600000"})],
        )
        trade = _manager().new_transaction("SH600000", TransactionType.BUY, 3.0)
    assert trade.price == 12.5
    assert trade.code == "SH600000"
    assert trade.amount == 3.0
    assert trade.transaction_type is TransactionType.BUY


def test_integer_price_becomes_float():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, PRICE_URL, json=7)
        trade = _manager().new_transaction("X", TransactionType.SELL, 1.0)
    assert trade.price == 7.0
    assert isinstance(trade.price, float)


def test_custom_base_url_and_session():
    base = "http://localhost:9999/api"
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, f"{base}/stockdata/price", json=4.25)
        manager = _manager(base_url=base, session=requests.Session())
        trade = manager.new_transaction("X", TransactionType.BUY, 2.0)
    assert trade.price == 4.25


def test_error_status_raises():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, PRICE_URL, status=400, json={"error": "nope"})
        with pytest.raises(PriceLookupError, match="获取价格失败: 400"):
            _manager().new_transaction("X", TransactionType.BUY, 1.0)


def test_object_payload_raises():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, PRICE_URL, json={"SH600000": 1.0})
        with pytest.raises(PriceLookupError, match="返回数据格式错误: map"):
            _manager().new_transaction("X", TransactionType.BUY, 1.0)


@pytest.mark.parametrize("payload", ["12.5", [1.0], True, None])
def test_other_payloads_raise(payload):
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, PRICE_URL, json=payload)
        with pytest.raises(PriceLookupError) as info:
            _manager().new_transaction("X", TransactionType.BUY, 1.0)
    assert str(info.value) == "返回数据格式错误"


def test_connection_failure_raises():
    with responses.RequestsMock():
        with pytest.raises(PriceLookupError):
            _manager().new_transaction("X", TransactionType.BUY, 1.0)


def test_manager_keeps_portfolio():
    portfolio = Portfolio(name="main", cash_balance=1.0)
    assert PositionManager(portfolio).portfolio is portfolio