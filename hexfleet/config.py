"""
Configuration for the hexfleet bot.

Settings come from HEXFLEET_* environment variables; a .env file in the
working directory is loaded first (real environment variables win).
Values that fail to parse fall back to their defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .captain import IdleMode
from .prng import DEFAULT_SEED0, DEFAULT_SEED1
from .rules import MAX_TURNS

ENV_PREFIX = "HEXFLEET_"


def _get_env(key: str) -> Optional[str]:
    return os.getenv(ENV_PREFIX + key)


def _get_env_bool(key: str, default: bool) -> bool:
    val = _get_env(key)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


def _get_env_int(key: str, default: int) -> int:
    val = _get_env(key)
    if val is None:
        return default
    try:
        # base 0 accepts 0x... seeds as well as plain decimals
        return int(val.strip(), 0)
    except ValueError:
        return default


def _get_env_str(key: str, default: str) -> str:
    val = _get_env(key)
    return default if val is None else val.strip()


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _get_env_log_level(default: str) -> str:
    level = _get_env_str("LOG_LEVEL", default).upper()
    return level if level in LOG_LEVELS else default


def _get_env_idle_mode(default: IdleMode) -> IdleMode:
    try:
        return IdleMode(_get_env_str("IDLE_MODE", default.value).lower())
    except ValueError:
        return default


@dataclass(frozen=True)
class BotConfig:
    """
    Runtime settings.

    Attributes:
        log_enabled: Write diagnostics to stderr at all.
        log_level: Logging level name for diagnostics.
        max_turns: Upper bound on turns played.
        seed0: First PRNG state word.
        seed1: Second PRNG state word.
        idle_x: Idle destination column.
        idle_y: Idle destination row.
        idle_mode: FIXED or WANDER when no barrel is in sight.
    """
    log_enabled: bool = True
    log_level: str = "DEBUG"
    max_turns: int = MAX_TURNS
    seed0: int = DEFAULT_SEED0
    seed1: int = DEFAULT_SEED1
    idle_x: int = 0
    idle_y: int = 0
    idle_mode: IdleMode = IdleMode.FIXED


def load_config(dotenv_path: Optional[str] = None) -> BotConfig:
    """
    Build a BotConfig from the environment.

    Args:
        dotenv_path: Explicit .env file; searched for when None.

    Returns:
        Populated BotConfig.
    """
    load_dotenv(dotenv_path or find_dotenv(usecwd=True))
    defaults = BotConfig()
    return BotConfig(
        log_enabled=_get_env_bool("LOG_ENABLED", defaults.log_enabled),
        log_level=_get_env_log_level(defaults.log_level),
        max_turns=_get_env_int("MAX_TURNS", defaults.max_turns),
        seed0=_get_env_int("SEED0", defaults.seed0),
        seed1=_get_env_int("SEED1", defaults.seed1),
        idle_x=_get_env_int("IDLE_X", defaults.idle_x),
        idle_y=_get_env_int("IDLE_Y", defaults.idle_y),
        idle_mode=_get_env_idle_mode(defaults.idle_mode),
    )
