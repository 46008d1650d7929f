from __future__ import annotations

import logging
import os
from dataclasses import dataclass

ENV_FILE = ".env"

logger = logging.getLogger(__name__)


def _env_value(name: str) -> str | None:
    value = os.getenv(name)
    if value:
        return value

    if os.path.exists(ENV_FILE):
        with open(ENV_FILE, "r", encoding="utf-8") as handle:
            for line in handle:
                line = line.strip()
                if line.startswith(f"{name}="):
                    return line.split("=", 1)[1].strip().strip('"').strip("'")
    return None


def _env(name: str, default: str) -> str:
    return _env_value(name) or default


def _env_number(name: str, default: float, cast: type = float):
    raw = _env_value(name)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Invalid %s=%r, using default %s", name, raw, default)
        return default


@dataclass(frozen=True)
class Settings:
    data_location: str
    api_timeout_seconds: float
    max_attempts: int
    retry_delay_seconds: float
    endpoint_gap_seconds: float
    log_level: str


def load_settings() -> Settings:
    return Settings(
        data_location=_env("SILVER_GIFT_DATA", "data"),
        api_timeout_seconds=_env_number("SILVER_GIFT_API_TIMEOUT", 5.0, float),
        max_attempts=_env_number("SILVER_GIFT_MAX_ATTEMPTS", 3, int),
        retry_delay_seconds=_env_number("SILVER_GIFT_RETRY_DELAY", 0.5, float),
        endpoint_gap_seconds=_env_number("SILVER_GIFT_ENDPOINT_GAP", 1.0, float),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
    )
