import pytest
from flask import Flask

from mqt.api_strategy import StrategyState, create_strategy_blueprint
from mqt.strategy_models import StrategyType

MOMENTUM = "动量策略"
MEAN_REVERSION = "均值回归策略"


@pytest.fixture
def state():
    return StrategyState()


@pytest.fixture
def client(state):
    app = Flask(__name__)
    app.register_blueprint(create_strategy_blueprint(state), url_prefix="/api/strategy")
    return app.test_client()


def test_state_has_default_strategies(state):
    assert set(state.strategies) == {MOMENTUM, MEAN_REVERSION}
    assert state.strategies[MOMENTUM].strategy_type is StrategyType.MOMENTUM
    assert state.backtest_results == {}


def test_list_strategies(client):
    data = client.get("/api/strategy/list").get_json()
    assert {s["name"] for s in data} == {MOMENTUM, MEAN_REVERSION}


def test_detail(client):
    response = client.get(f"/api/strategy/detail/{MEAN_REVERSION}")
    assert response.status_code == 200
    data = response.get_json()
    assert data["strategy_type"] == "MeanReversion"
    assert data["enabled"] is False


def test_detail_unknown(client):
    response = client.get("/api/strategy/detail/nothing")
    assert response.status_code == 400
    assert response.get_json() == {"error": "未找到策略: nothing"}


def test_run_strategy(client):
    data = client.post("/api/strategy/run", json={"name": MOMENTUM}).get_json()
    assert data["success"] is True
    assert data["message"] == f"策略 {MOMENTUM} 已启动"
    assert data["strategy"]["name"] == MOMENTUM


def test_run_unknown_strategy(client):
    response = client.post("/api/strategy/run", json={"name": "nothing"})
    assert response.status_code == 400
    assert response.get_json()["error"] == "未找到策略: nothing"


def test_backtest_defaults(client, state):
    data = client.post("/api/strategy/backtest", json={"name": MOMENTUM}).get_json()
    assert data["strategy_name"] == MOMENTUM
    assert data["initial_capital"] == 100000.0
    assert data["final_capital"] == 110000.0
    assert data["total_trades"] == 20
    assert data["trades"] == []
    assert MOMENTUM in state.backtest_results


def test_backtest_initial_capital(client):
    data = client.post(
        "/api/strategy/backtest", json={"name": MOMENTUM, "initial_capital": 2500}
    ).get_json()
    assert data["initial_capital"] == 2500.0


def test_backtest_result_round_trip(client):
    posted = client.post("/api/strategy/backtest", json={"name": MEAN_REVERSION}).get_json()
    fetched = client.get(f"/api/strategy/backtest_result/{MEAN_REVERSION}").get_json()
    assert fetched == posted


def test_backtest_result_missing(client):
    response = client.get(f"/api/strategy/backtest_result/{MOMENTUM}")
    assert response.status_code == 400
    assert response.get_json() == {"error": f"未找到策略 {MOMENTUM} 的回测结果"}


def test_backtest_invalid_capital(client):
    response = client.post(
        "/api/strategy/backtest", json={"name": MOMENTUM, "initial_capital": "lots"}
    )
    assert response.status_code == 400


def test_backtest_missing_name(client):
    response = client.post("/api/strategy/backtest", json={})
    assert response.status_code == 400