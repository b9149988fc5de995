"""
Runtime configuration.

Values come from the process environment (a .env file is honoured by the
host, which calls load_dotenv() before load_settings()). Every setting has a
default so the core can be constructed without any environment at all.

    SUGGEST_API_BASE          origin of the suggestion service
    SUGGEST_SEARCH_PATH       endpoint path
    SUGGEST_DEBOUNCE_MS       quiet window before a query fires
    SUGGEST_MIN_QUERY_LENGTH  trimmed length needed to fire a query
    SUGGEST_REQUEST_TIMEOUT   seconds per HTTP request
    SUGGEST_RESULTS_PATH      navigation path for resolved suggestions
    SUGGEST_LOG_LEVEL         root log level for the host
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from suggest.models import RESULTS_PATH

API_BASE          = "http://localhost:3000"
SEARCH_PATH       = "/api/courses/search"
DEBOUNCE_MS       = 300
MIN_QUERY_LENGTH  = 2      # trimmed length must be strictly greater than 1
REQUEST_TIMEOUT   = 10.0
LOG_LEVEL         = "INFO"


@dataclass(frozen=True)
class Settings:
    api_base: str = API_BASE
    search_path: str = SEARCH_PATH
    debounce_ms: int = DEBOUNCE_MS
    min_query_length: int = MIN_QUERY_LENGTH
    request_timeout: float = REQUEST_TIMEOUT
    results_path: str = RESULTS_PATH
    log_level: str = LOG_LEVEL

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from env (defaults to os.environ)."""
    if env is None:
        env = os.environ

    return Settings(
        api_base=env.get("SUGGEST_API_BASE", API_BASE).rstrip("/"),
        search_path=env.get("SUGGEST_SEARCH_PATH", SEARCH_PATH),
        debounce_ms=_int(env, "SUGGEST_DEBOUNCE_MS", DEBOUNCE_MS),
        min_query_length=_int(env, "SUGGEST_MIN_QUERY_LENGTH", MIN_QUERY_LENGTH),
        request_timeout=_float(env, "SUGGEST_REQUEST_TIMEOUT", REQUEST_TIMEOUT),
        results_path=env.get("SUGGEST_RESULTS_PATH", RESULTS_PATH),
        log_level=env.get("SUGGEST_LOG_LEVEL", LOG_LEVEL).upper(),
    )
