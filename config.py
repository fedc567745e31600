"""
Configuration Management - MongoDB Version
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from bookstore.core.errors import ConfigError


def get_int_env(key: str, default: int = 0, environ: Optional[Mapping[str, str]] = None,
                minimum: Optional[int] = None) -> int:
    """Get integer from environment variable"""
    env = os.environ if environ is None else environ
    raw = env.get(key)
    if raw is None or not str(raw).strip():
        return default
    try:
        value = int(str(raw).strip())
    except (ValueError, TypeError):
        raise ConfigError(f"{key} must be an integer, got {raw!r}")
    if minimum is not None and value < minimum:
        raise ConfigError(f"{key} must be >= {minimum}, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    """Settings handed to the seeder and the query runner"""

    # ============== MONGODB CONFIGURATION ==============
    mongodb_uri: str
    db_name: str = "plp_bookstore"
    collection_name: str = "books"
    timeout_ms: int = 5000

    # ============== QUERY CONFIGURATION ==============
    page_size: int = 5
    sort_limit: int = 5

    # ============== LOGGING ==============
    log_level: str = "INFO"
    log_dir: Optional[str] = None


def load_settings(environ: Optional[Mapping[str, str]] = None, use_dotenv: bool = True) -> Settings:
    """Build Settings from the environment (and .env when present).

    Raises ConfigError when MONGODB_URI is missing or a numeric setting
    does not parse.
    """
    if environ is None:
        if use_dotenv:
            load_dotenv()
        environ = os.environ

    uri = (environ.get("MONGODB_URI") or "").strip()
    if not uri:
        raise ConfigError(
            "MONGODB_URI environment variable not set. "
            "Set it to your MongoDB connection string, e.g. "
            "mongodb+srv://<username>:<password>@cluster0.xxxxx.mongodb.net/plp_bookstore"
        )

    return Settings(
        mongodb_uri=uri,
        db_name=environ.get("MONGODB_DB_NAME") or "plp_bookstore",
        collection_name=environ.get("MONGODB_COLLECTION") or "books",
        timeout_ms=get_int_env("MONGODB_TIMEOUT_MS", 5000, environ, minimum=1),
        page_size=get_int_env("PAGE_SIZE", 5, environ, minimum=1),
        sort_limit=get_int_env("SORT_LIMIT", 5, environ, minimum=1),
        log_level=(environ.get("LOG_LEVEL") or "INFO").upper(),
        log_dir=environ.get("LOG_DIR") or None,
    )
