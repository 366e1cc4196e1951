"""
Static game configuration.

Board shape, time budget and timing constants are fixed when a session
controller is built. Values can come from code defaults or from the
environment (``.env`` is loaded through python-dotenv).
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_PREFIX = "PAIRS_"


class ConfigurationError(Exception):
    """Raised when configuration values are missing or inconsistent."""
    pass


def env_int(name: str, default: int) -> int:
    """
    Read an integer from ``PAIRS_<name>``.

    Args:
        name: Variable name without prefix
        default: Value used when the variable is unset or empty

    Returns:
        Parsed integer
    """
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from e


@dataclass
class BaseConfiguration:
    """Game configuration shared by every host."""
    rows: int = 4
    cols: int = 4
    symbol_count: int = 8
    time_budget_seconds: int = 60
    mismatch_recovery_delay_ms: int = 300
    tick_interval_ms: int = 1000

    def __post_init__(self) -> None:
        self.validate()

    @property
    def total_cards(self) -> int:
        return self.rows * self.cols

    def validate(self) -> None:
        """
        Check the values describe a playable board.

        Raises:
            ConfigurationError: If any value is out of range
        """
        for name in ("rows", "cols", "symbol_count", "time_budget_seconds", "tick_interval_ms"):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
        if not isinstance(self.mismatch_recovery_delay_ms, int) or self.mismatch_recovery_delay_ms < 0:
            raise ConfigurationError("mismatch_recovery_delay_ms must be a non-negative integer")
        if self.total_cards != self.symbol_count * 2:
            raise ConfigurationError(
                f"{self.rows}x{self.cols} grid holds {self.total_cards} cards, "
                f"which needs {self.total_cards / 2:g} symbol pairs, not {self.symbol_count}"
            )

    @classmethod
    def env_overrides(cls, dotenv_path: Optional[str] = None) -> dict:
        """Collect game settings from the environment."""
        load_dotenv(dotenv_path)
        defaults = cls.__dataclass_fields__
        return {
            "rows": env_int("ROWS", defaults["rows"].default),
            "cols": env_int("COLS", defaults["cols"].default),
            "symbol_count": env_int("SYMBOL_COUNT", defaults["symbol_count"].default),
            "time_budget_seconds": env_int("TIME_BUDGET_SECONDS", defaults["time_budget_seconds"].default),
            "mismatch_recovery_delay_ms": env_int("MISMATCH_DELAY_MS", defaults["mismatch_recovery_delay_ms"].default),
            "tick_interval_ms": env_int("TICK_INTERVAL_MS", defaults["tick_interval_ms"].default),
        }

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "BaseConfiguration":
        config = cls(**cls.env_overrides(dotenv_path))
        logger.debug("Loaded configuration: %s", config)
        return config
