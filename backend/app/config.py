import logging
import os

logger = logging.getLogger(__name__)


def _int_env(name: str, default: int) -> int:
    """Read an integer environment variable, falling back to `default` when unset or invalid."""
    try:
        return int(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        logger.warning("Invalid %s value; falling back to default %s", name, default)
        return default


def _log_level_env(name: str, default: str) -> str:
    """Read a logging level name, falling back to `default` when it is not one logging knows."""
    value = os.getenv(name, default).upper()
    if not isinstance(logging.getLevelName(value), int):
        logger.warning("Invalid %s value %r; falling back to %s", name, value, default)
        return default
    return value


class SimulationSettings:
    """Centralized API settings with environment variable overrides"""
    DEFAULT_MONTHS_AHEAD = _int_env("SIM_DEFAULT_MONTHS_AHEAD", 24)
    MAX_MONTHS_AHEAD = _int_env("SIM_MAX_MONTHS_AHEAD", 120)

    LOG_LEVEL = _log_level_env("SIM_LOG_LEVEL", "INFO")

    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv(
            "SIM_CORS_ORIGINS",
            "http://localhost:8081,http://127.0.0.1:8081,http://localhost:19006,http://127.0.0.1:19006",
        ).split(",")
        if origin.strip()
    ]
