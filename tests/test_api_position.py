import pytest
import responses
from flask import Flask
from responses import matchers

from mqt.api_position import PositionState, create_position_blueprint
from mqt.portfolio import Portfolio

PRICE_BASE = "http://prices.test/api"
CODE = "SH600000"


@pytest.fixture
def state():
    return PositionState()


@pytest.fixture
def client(state):
    app = Flask(__name__)
    app.register_blueprint(
        create_position_blueprint(state, PRICE_BASE), url_prefix="/api/position"
    )
    return app.test_client()


def _mock_price(rsps, body, status=200):
    rsps.add(
        responses.GET,
        f"{PRICE_BASE}/stockdata/price",
        json=body,
        status=status,
        match=[matchers.query_param_matcher({"code": CODE})],
    )


def _add_portfolio(client, name="alpha", cash=5000.0):
    return client.post(
        "/api/position/add_portfolio", json={"name": name, "cash_balance": cash}
    )


def _query(client, name="alpha"):
    return client.post("/api/position/query_portfolio", json={"name": name})


def test_list_starts_empty(client):
    response = client.get("/api/position/list")
    assert response.status_code == 200
    assert response.get_json() == []


def test_add_portfolio_then_list(client):
    response = _add_portfolio(client)
    assert response.get_json() == {"success": True}
    assert client.get("/api/position/list").get_json() == ["alpha"]


def test_duplicate_portfolio_rejected(client):
    _add_portfolio(client)
    response = _add_portfolio(client)
    assert response.status_code == 400
    assert response.get_json() == {"error": "投资组合已存在"}


def test_remove_missing_portfolio(client):
    response = client.post("/api/position/remove_portfolio", json={"name": "ghost"})
    assert response.status_code == 400
    assert response.get_json() == {"error": "投资组合不存在"}


def test_remove_portfolio(client):
    _add_portfolio(client)
    response = client.post("/api/position/remove_portfolio", json={"name": "alpha"})
    assert response.get_json() == {"success": True}
    assert client.get("/api/position/list").get_json() == []


def test_query_portfolio(client):
    _add_portfolio(client, cash=5000.0)
    data = _query(client).get_json()
    assert data == {"name": "alpha", "cash_balance": 5000.0, "positions": []}


def test_query_missing_portfolio(client):
    response = _query(client, "ghost")
    assert response.status_code == 400
    assert response.get_json()["error"] == "投资组合不存在"


def test_missing_field_is_bad_request(client):
    response = client.post("/api/position/add_portfolio", json={"name": "alpha"})
    assert response.status_code == 400
    assert "cash_balance" in response.get_json()["error"]


def test_non_json_body_is_bad_request(client):
    response = client.post("/api/position/add_portfolio", data="not json")
    assert response.status_code == 400


def test_add_position_to_missing_portfolio(client):
    response = client.post(
        "/api/position/add", json={"portfolio": "ghost", "code": CODE, "amount": 1}
    )
    assert response.status_code == 400
    assert response.get_json() == {"error": "投资组合不存在"}


def test_add_position_buys_at_current_price(client):
    _add_portfolio(client, cash=5000.0)
    with responses.RequestsMock() as rsps:
        _mock_price(rsps, 10.0)
        response = client.post(
            "/api/position/add", json={"portfolio": "alpha", "code": CODE, "amount": 100}
        )
    assert response.status_code == 200
    assert response.get_json() == {"success": True, "message": "持仓添加成功"}
    data = _query(client).get_json()
    assert len(data["positions"]) == 1
    position = data["positions"][0]
    assert position["code"] == CODE
    assert position["amount"] == 100.0
    assert position["cost"] == 10.0
    assert data["cash_balance"] < 5000.0


def test_add_position_insufficient_cash(client):
    _add_portfolio(client, cash=10.0)
    with responses.RequestsMock() as rsps:
        _mock_price(rsps, 10.0)
        response = client.post(
            "/api/position/add", json={"portfolio": "alpha", "code": CODE, "amount": 100}
        )
    assert response.status_code == 400
    assert response.get_json() == {"error": "现金余额不足"}
    assert _query(client).get_json()["cash_balance"] == 10.0


def test_add_position_price_failure(client):
    _add_portfolio(client)
    with responses.RequestsMock() as rsps:
        _mock_price(rsps, {"error": "missing"}, status=400)
        response = client.post(
            "/api/position/add", json={"portfolio": "alpha", "code": CODE, "amount": 1}
        )
    assert response.status_code == 400
    assert response.get_json()["error"].startswith("获取价格失败")


def test_add_position_map_price_rejected(client):
    _add_portfolio(client)
    with responses.RequestsMock() as rsps:
        _mock_price(rsps, {"price": 1.0})
        response = client.post(
            "/api/position/add", json={"portfolio": "alpha", "code": CODE, "amount": 1}
        )
    assert response.get_json() == {"error": "返回数据格式错误: map"}


def test_remove_position_restores_cash(client):
    _add_portfolio(client, cash=5000.0)
    with responses.RequestsMock() as rsps:
        _mock_price(rsps, 10.0)
        client.post(
            "/api/position/add", json={"portfolio": "alpha", "code": CODE, "amount": 100}
        )
        response = client.post(
            "/api/position/remove",
            json={"portfolio": "alpha", "code": CODE, "amount": 100},
        )
    assert response.get_json() == {"success": True, "message": "持仓减少成功"}
    data = _query(client).get_json()
    assert data["positions"] == []
    assert data["cash_balance"] == 5000.0


def test_remove_position_without_holding(client):
    _add_portfolio(client)
    with responses.RequestsMock() as rsps:
        _mock_price(rsps, 10.0)
        response = client.post(
            "/api/position/remove", json={"portfolio": "alpha", "code": CODE, "amount": 1}
        )
    assert response.status_code == 400
    assert response.get_json() == {"error": "没有该股票的持仓"}


def test_state_find():
    state = PositionState()
    portfolio = Portfolio("beta", 1.0)
    state.portfolios.append(portfolio)
    assert state.find("beta") is portfolio
    assert state.find("gamma") is None