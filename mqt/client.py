"""Interactive command-line client for the trading server."""

import argparse
import json
import logging
import sys

import requests

from mqt.constants import BASE_URL

logger = logging.getLogger(__name__)

TIMEOUT = 30

_HELP_LINES = (
    "可用命令：",
    "  help                    - 显示帮助信息",
    "  exit, quit              - 退出客户端",
    "  status                  - 检查服务器状态",
    "  stockdata price <code>  - 获取股票价格",
    "  stockdata init          - 初始化股票数据抓取器",
    "  stockdata fetch         - 抓取股票数据",
    "  stockdata close         - 关闭股票数据抓取器",
    "  stockdata status        - 查看股票数据抓取器状态",
    "  position list           - 列出当前持仓",
    "  position query_portfolio <name> - 查询投资组合信息",
    "  position add_portfolio <name> <cash_balance> - 添加投资组合",
    "  position remove_portfolio <name> - 删除投资组合",
    "  position add <portfolio> <code> <amount> - 添加持仓",
    "  position remove <portfolio> <code> <amount> - 减少持仓",
    "  strategy list           - 列出可用策略",
    "  strategy run <name>     - 运行策略",
    "  strategy backtest <name> - 回测策略",
)


def _show(value):
    """Compact JSON text of a value, keeping non-ASCII characters."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _parse_number(text):
    """Parse a plain decimal number; raise ValueError on anything else."""
    if "_" in text:
        raise ValueError(f"invalid number: {text!r}")
    return float(text)


def _get(session, url):
    return session.get(url, timeout=TIMEOUT)


def _post(session, url, payload=None):
    if payload is None:
        return session.post(url, timeout=TIMEOUT)
    return session.post(url, json=payload, timeout=TIMEOUT)


def print_help():
    """Print the list of available commands."""
    for line in _HELP_LINES:
        print(line)


def check_server_status(session, base_url):
    """Print the server's status report."""
    response = _get(session, f"{base_url}/status")
    if response.ok:
        print(f"服务器状态: {_show(response.json())}")
    else:
        print("无法连接到服务器, 请确认服务器是否运行")


def _simple_post(session, url, ok_text, fail_text, payload=None):
    response = _post(session, url, payload)
    if response.ok:
        print(ok_text)
    else:
        print(f"{fail_text}: {response.text}")


def handle_stockdata_command(session, base_url, cmd):
    """Run one 'stockdata' sub-command."""
    if cmd == "init":
        _simple_post(
            session, f"{base_url}/stockdata/init",
            "股票数据抓取器初始化成功", "股票数据抓取器初始化失败",
        )
    elif cmd == "fetch":
        _simple_post(
            session, f"{base_url}/stockdata/fetch",
            "股票数据抓取成功", "股票数据抓取失败",
            payload={"save_to_file": True},
        )
    elif cmd == "close":
        _simple_post(
            session, f"{base_url}/stockdata/close",
            "股票数据抓取器关闭成功", "股票数据抓取器关闭失败",
        )
    elif cmd == "status":
        response = _get(session, f"{base_url}/stockdata/status")
        if response.ok:
            print(f"股票数据抓取器状态: {_show(response.json())}")
        else:
            print(f"获取状态失败: {response.text}")
    elif cmd == "price":
        response = _get(session, f"{base_url}/stockdata/price")
        if response.ok:
            print(f"股票价格: {_show(response.json())}")
    else:
        print("未知的股票数据命令")


def _query_portfolio(session, base_url, rest):
    parts = rest.split()
    if not parts:
        print("用法: position query_portfolio <name>")
        return
    response = _post(session, f"{base_url}/position/query_portfolio", {"name": parts[0]})
    if not response.ok:
        print(f"查询投资组合失败: {response.text}")
        return
    payload = response.json()
    if not isinstance(payload, dict):
        raise ValueError("投资组合数据格式错误")
    missing = [key for key in ("name", "cash_balance", "positions") if key not in payload]
    if missing:
        raise ValueError(f"投资组合数据缺少字段: {', '.join(missing)}")
    portfolio = {
        "name": payload["name"],
        "cash_balance": payload["cash_balance"],
        "positions": payload["positions"],
    }
    print(f"投资组合信息: {_show(portfolio)}")


def _add_portfolio(session, base_url, rest):
    parts = rest.split()
    if len(parts) < 2:
        print("用法: position add_portfolio <name> <cash_balance>")
        return
    cash_balance = _parse_number(parts[1])
    _simple_post(
        session, f"{base_url}/position/add_portfolio",
        "添加投资组合成功", "添加投资组合失败",
        payload={"name": parts[0], "cash_balance": cash_balance},
    )


def _remove_portfolio(session, base_url, rest):
    parts = rest.split()
    if not parts:
        print("用法: position remove_portfolio <name>")
        return
    _simple_post(
        session, f"{base_url}/position/remove_portfolio",
        "删除投资组合成功", "删除投资组合失败",
        payload={"name": parts[0]},
    )


def _trade(session, base_url, endpoint, rest, ok_text, fail_text, usage):
    parts = rest.split()
    if len(parts) < 3:
        print(usage)
        return
    portfolio, code = parts[0], parts[1]
    amount = _parse_number(parts[2])
    _simple_post(
        session, f"{base_url}/position/{endpoint}", ok_text, fail_text,
        payload={"portfolio": portfolio, "code": code, "amount": amount},
    )


def handle_position_command(session, base_url, cmd):
    """Run one 'position' sub-command."""
    if cmd == "list":
        response = _get(session, f"{base_url}/position/list")
        if response.ok:
            print(f"当前持仓: {_show(response.json())}")
        else:
            print(f"获取持仓失败: {response.text}")
    elif cmd.startswith("query_portfolio "):
        _query_portfolio(session, base_url, cmd.removeprefix("query_portfolio "))
    elif cmd.startswith("add_portfolio "):
        _add_portfolio(session, base_url, cmd.removeprefix("add_portfolio "))
    elif cmd.startswith("remove_portfolio "):
        _remove_portfolio(session, base_url, cmd.removeprefix("remove_portfolio "))
    elif cmd.startswith("add "):
        _trade(
            session, base_url, "add", cmd.removeprefix("add "),
            "添加持仓成功", "添加持仓失败",
            "用法: position add <portfolio> <code> <amount>",
        )
    elif cmd.startswith("remove "):
        _trade(
            session, base_url, "remove", cmd.removeprefix("remove "),
            "减少持仓成功", "减少持仓失败",
            "用法: position remove <portfolio> <code> <amount>",
        )
    else:
        print("未知的持仓命令")


def handle_strategy_command(session, base_url, cmd):
    """Run one 'strategy' sub-command."""
    if cmd == "list":
        response = _get(session, f"{base_url}/strategy/list")
        if response.ok:
            print(f"可用策略: {_show(response.json())}")
        else:
            print(f"获取策略列表失败: {response.text}")
    elif cmd.startswith("run "):
        _simple_post(
            session, f"{base_url}/strategy/run",
            "策略运行成功", "策略运行失败",
            payload={"name": cmd.removeprefix("run ")},
        )
    elif cmd.startswith("backtest "):
        response = _post(
            session, f"{base_url}/strategy/backtest", {"name": cmd.removeprefix("backtest ")}
        )
        if response.ok:
            print(f"回测结果: {_show(response.json())}")
        else:
            print(f"策略回测失败: {response.text}")
    else:
        print("未知的策略命令")


def dispatch(session, base_url, line):
    """Run one input line; return False when the client should stop."""
    command = line.strip()
    if command in ("exit", "quit"):
        print("退出客户端")
        return False
    if command == "help":
        print_help()
    elif command == "status":
        check_server_status(session, base_url)
    elif command.startswith("stockdata "):
        handle_stockdata_command(session, base_url, command.removeprefix("stockdata "))
    elif command.startswith("position "):
        handle_position_command(session, base_url, command.removeprefix("position "))
    elif command.startswith("strategy "):
        handle_strategy_command(session, base_url, command.removeprefix("strategy "))
    else:
        print("未知命令, 输入 'help' 查看可用命令")
    return True


def main(argv=None):
    """Run the interactive client; return the process exit status."""
    parser = argparse.ArgumentParser(description="量化交易系统客户端")
    parser.add_argument("--base-url", default=BASE_URL)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        stream=sys.stdout,
        format="[%(levelname)s] (%(filename)s:%(lineno)d) - %(message)s",
    )
    logger.info("启动交易系统客户端...")

    print("欢迎使用量化交易系统客户端")
    print("输入 'help' 查看可用命令, 输入 'exit' 退出")

    with requests.Session() as session:
        while True:
            try:
                line = input("> ")
            except EOFError:
                break
            try:
                if not dispatch(session, args.base_url, line):
                    break
            except (requests.RequestException, ValueError) as exc:
                print(f"错误: {exc}", file=sys.stderr)
                return 1
    return 0