from __future__ import annotations

import os

_FALSE_VALUES = {"0", "false", "no", "off"}

DEFAULT_UPLOAD_MAX_BYTES = 10 * 1024 * 1024
DEFAULT_PAGE_SIZE = 10


def get_db_path() -> str:
    return os.getenv("NOMIRATE_DB_PATH", "nomirate.db")


def get_log_level() -> str:
    return os.getenv("NOMIRATE_LOG_LEVEL", "INFO").strip().upper()


def get_upload_dir() -> str:
    return os.getenv("NOMIRATE_UPLOAD_DIR", "uploads")


def get_upload_url_prefix() -> str:
    prefix = os.getenv("NOMIRATE_UPLOAD_URL_PREFIX", "/uploads").strip()
    return "/" + prefix.strip("/") if prefix.strip("/") else "/uploads"


def get_upload_max_bytes() -> int:
    return _get_int("NOMIRATE_UPLOAD_MAX_BYTES", DEFAULT_UPLOAD_MAX_BYTES, minimum=1)


def get_default_page_size() -> int:
    return _get_int("NOMIRATE_DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE, minimum=1)


def env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in _FALSE_VALUES


def _get_int(name: str, default: int, *, minimum: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return max(value, minimum)
