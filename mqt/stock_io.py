"""Saving, loading and merging collections of stock data."""

import copy
import json
import logging
import os
from datetime import datetime

from mqt.stock_models import StockData, merge_stock_data

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = "output"


def save_to_json(stocks, filename):
    """Write the stocks as pretty-printed UTF-8 JSON."""
    payload = [stock.to_dict() for stock in stocks]
    with open(filename, "w", encoding="utf-8") as handle:
        json.dump(payload, handle, ensure_ascii=False, indent=2)


def load_from_json(filename):
    """Read stocks written by save_to_json; malformed content raises ValueError."""
    with open(filename, encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, list):
        raise ValueError("stock data file must hold a JSON array")
    stocks = []
    for entry in payload:
        if not isinstance(entry, dict):
            raise ValueError("every stock entry must be a JSON object")
        stocks.append(StockData.from_dict(entry))
    return stocks


def create_output_dir(directory):
    """Create the directory and its parents if they do not exist yet."""
    os.makedirs(directory, exist_ok=True)


def get_timestamped_filename(directory, prefix, extension):
    """Return '<directory>/<prefix>_<YYYYmmdd_HHMMSS>.<extension>' in local time."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    suffix = extension if extension.startswith(".") else f".{extension}"
    return f"{directory}/{prefix}_{timestamp}{suffix}"


def save_stock_data(stocks, output_dir=DEFAULT_OUTPUT_DIR):
    """Save the stocks to a new timestamped JSON file and return its name."""
    try:
        create_output_dir(output_dir)
    except OSError as exc:
        logger.error("创建输出目录失败: %s, 将保存到当前目录", exc)

    filename = get_timestamped_filename(output_dir, "stock_data", "json")
    try:
        save_to_json(stocks, filename)
    except OSError as exc:
        logger.error("保存JSON文件失败: %s", exc)
        raise
    logger.info("数据已保存到 %s", filename)
    return filename


def merge_stock_data_sources(data_sources):
    """Combine several lists of stocks into one record per stock code.

    The inputs are left untouched; the first record seen for a code is copied
    and later records only fill in its blank fields.
    """
    merged = {}
    for source in data_sources:
        for stock in source:
            existing = merged.get(stock.code)
            if existing is None:
                merged[stock.code] = copy.copy(stock)
            else:
                merge_stock_data(existing, stock)
    return list(merged.values())