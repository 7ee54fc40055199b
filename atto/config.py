from __future__ import annotations
import logging
import os
from typing import Optional


# Defaults
DEFAULT_MAX_DEPTH = 200
DEFAULT_MAX_EVAL_DEPTH = 150
DEFAULT_LOG_LEVEL = "WARNING"


def int_from_env(var: str, default: Optional[int]) -> Optional[int]:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{var} must be positive, got {value}")
    return value


def get_max_depth() -> int:
    return int_from_env('ATTO_MAX_DEPTH', DEFAULT_MAX_DEPTH)


def get_max_eval_depth() -> int:
    return int_from_env('ATTO_MAX_EVAL_DEPTH', DEFAULT_MAX_EVAL_DEPTH)


def get_step_budget() -> Optional[int]:
    # unset means unlimited
    return int_from_env('ATTO_STEP_BUDGET', None)


def get_log_level() -> int:
    raw = os.environ.get('ATTO_LOG_LEVEL', DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(raw)
    if not isinstance(level, int):
        raise ValueError(f"ATTO_LOG_LEVEL is not a logging level: {raw!r}")
    return level


def configure_logging() -> None:
    """Attach a stderr handler to the atto logger at ATTO_LOG_LEVEL.

    The library itself never calls this; hosts opt in.
    """
    logger = logging.getLogger("atto")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(name)s %(levelname)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(get_log_level())
