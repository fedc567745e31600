"""
Utility functions shared by the seeder and the query runner
"""

import os
import sys
import logging
from datetime import datetime
from typing import Optional, Dict, Any, List, TextIO


# ============== LOGGING SETUP ==============

def setup_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    """Setup logging configuration"""
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Console handler; stdout is reserved for the report
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(log_format, date_format))
    root_logger.addHandler(console_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(
            os.path.join(log_dir, f"bookstore_{datetime.now().strftime('%Y%m%d')}.log"),
            encoding="utf-8"
        )
        file_handler.setFormatter(logging.Formatter(log_format, date_format))
        root_logger.addHandler(file_handler)

    # Set specific log levels for noisy libraries
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("motor").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


# ============== CONSOLE OUTPUT ==============

def emit(out: TextIO, line: str = "") -> None:
    print(line, file=out)


def format_price(price: Any) -> str:
    """Stored price as-is ($11.5); a missing price shows as n/a"""
    if price is None:
        return "n/a"
    return f"${price}"


def format_average(value: Any) -> str:
    """Two-decimal average ($12.34); n/a when the group had no prices"""
    if value is None:
        return "n/a"
    try:
        return f"${float(value):.2f}"
    except (TypeError, ValueError):
        return f"${value}"


def format_decade(decade: Any) -> str:
    """1920s; documents without a year group under None"""
    if decade is None:
        return "Unknown decade"
    return f"{int(decade)}s"


def format_index_key(key: Any) -> str:
    """Render an index key as {field:dir, ...}

    index_information() returns keys as a list of (field, direction) pairs,
    list_indexes() as a mapping; both are accepted.
    """
    pairs = key.items() if isinstance(key, dict) else key
    return "{" + ", ".join(f"{field}:{direction}" for field, direction in pairs) + "}"


def describe_indexes(info: Dict[str, Dict[str, Any]]) -> List[str]:
    """One `name: {field:dir}` line per index"""
    return [f"{name}: {format_index_key(spec.get('key', []))}" for name, spec in info.items()]
