"""The trading server: status endpoints plus the position and strategy APIs."""

import argparse
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone

from flask import Flask, jsonify

from mqt.api_position import PositionState, create_position_blueprint
from mqt.api_strategy import StrategyState, create_strategy_blueprint
from mqt.constants import BASE_URL, IP, PORT

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def _now():
    return datetime.now(timezone.utc)


def _rem(value, divisor):
    return value - divisor * math.trunc(value / divisor)


@dataclass
class ServerState:
    """When the server started and which version it runs."""

    start_time: datetime = field(default_factory=_now)
    version: str = VERSION

    def uptime_text(self, now=None):
        """Describe time since start as 'D days, H hours, M minutes'."""
        now = _now() if now is None else now
        seconds = math.trunc((now - self.start_time).total_seconds())
        days = math.trunc(seconds / 86400)
        hours = _rem(math.trunc(seconds / 3600), 24)
        minutes = _rem(math.trunc(seconds / 60), 60)
        return f"{days} days, {hours} hours, {minutes} minutes"


def create_app(server_state=None, position_state=None, strategy_state=None):
    """Build the Flask application with every API mounted under /api."""
    server_state = server_state or ServerState()
    position_state = position_state or PositionState()
    strategy_state = strategy_state or StrategyState()

    app = Flask(__name__)

    @app.after_request
    def _allow_cors(response):
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Methods"] = "*"
        response.headers["Access-Control-Allow-Headers"] = "*"
        return response

    @app.get("/api/status")
    def get_status():
        return jsonify(
            {
                "status": "running",
                "uptime": server_state.uptime_text(),
                "version": server_state.version,
            }
        )

    @app.get("/api/health")
    def health_check():
        return "OK"

    app.register_blueprint(
        create_position_blueprint(position_state, BASE_URL),
        url_prefix="/api/position",
    )
    app.register_blueprint(
        create_strategy_blueprint(strategy_state), url_prefix="/api/strategy"
    )
    return app


def main(argv=None):
    """Start the trading server; returns 0 once it stops."""
    parser = argparse.ArgumentParser(description="量化交易系统服务器")
    parser.add_argument("--host", default=IP)
    parser.add_argument("--port", type=int, default=int(PORT))
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="[%(levelname)s %(filename)s:%(lineno)d] %(message)s",
    )
    logger.info("启动交易系统服务器...")
    app = create_app()
    app.run(host=args.host, port=args.port)
    return 0