from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    api_key: str | None
    rate_limit: str
    rate_limit_enabled: bool
    analyze_rate_limit: str
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    analytics_enabled: bool
    analytics_db_path: str
    analytics_retention_days: int
    ats_llm_enabled: bool
    ats_llm_timeout_s: float
    ats_llm_max_output_tokens: int
    scan_guard_max_keys: int


settings = Settings(
    api_key=_get_env("API_KEY"),
    rate_limit=_get_env("RATE_LIMIT", "60/minute") or "60/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    analyze_rate_limit=_get_env("ATS_ANALYZE_RATE_LIMIT", "10/minute") or "10/minute",
    log_level=(_get_env("LOG_LEVEL", "INFO") or "INFO").upper(),
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ],
    ),
    analytics_enabled=_get_env_bool("ANALYTICS_ENABLED", True),
    analytics_db_path=_get_env("ANALYTICS_DB_PATH", "data/analytics.db") or "data/analytics.db",
    analytics_retention_days=_get_env_int("ANALYTICS_RETENTION_DAYS", 180),
    ats_llm_enabled=_get_env_bool("ATS_LLM_ENABLED", True),
    ats_llm_timeout_s=_get_env_float("ATS_LLM_TIMEOUT_S", 20.0),
    ats_llm_max_output_tokens=_get_env_int("ATS_LLM_MAX_OUTPUT_TOKENS", 2000),
    scan_guard_max_keys=_get_env_int("SCAN_GUARD_MAX_KEYS", 512),
)

if settings.ats_llm_timeout_s <= 0:
    raise RuntimeError("ATS_LLM_TIMEOUT_S must be a positive number of seconds.")

if settings.scan_guard_max_keys < 1:
    raise RuntimeError("SCAN_GUARD_MAX_KEYS must be at least 1.")
