"""
Desktop host configuration.

Adds window geometry, device class and log level on top of the game
settings. Read from ``PAIRS_*`` environment variables like the base.
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from pairs.ui_logic.grid_layout import DeviceClass

from .base import BaseConfiguration, ConfigurationError, ENV_PREFIX, env_int


@dataclass
class DesktopConfiguration(BaseConfiguration):
    """Configuration for the Qt desktop host and the headless runner."""
    device_class: DeviceClass = DeviceClass.DESKTOP
    window_width: int = 800
    window_height: int = 800
    log_level: str = "INFO"

    def validate(self) -> None:
        super().validate()
        if not isinstance(self.device_class, DeviceClass):
            raise ConfigurationError(f"device_class must be a DeviceClass, got {self.device_class!r}")
        if self.window_width <= 0 or self.window_height <= 0:
            raise ConfigurationError("window size must be positive")
        if not isinstance(self.log_level, str) or not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigurationError(f"unknown log level {self.log_level!r}")

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level.upper())

    @classmethod
    def env_overrides(cls, dotenv_path: Optional[str] = None) -> dict:
        values = super().env_overrides(dotenv_path)

        device = os.getenv(ENV_PREFIX + "DEVICE_CLASS", DeviceClass.DESKTOP.value).strip().lower()
        try:
            values["device_class"] = DeviceClass(device)
        except ValueError as e:
            choices = ", ".join(d.value for d in DeviceClass)
            raise ConfigurationError(f"{ENV_PREFIX}DEVICE_CLASS must be one of {choices}") from e

        values["window_width"] = env_int("WINDOW_WIDTH", 800)
        values["window_height"] = env_int("WINDOW_HEIGHT", 800)
        values["log_level"] = os.getenv(ENV_PREFIX + "LOG_LEVEL", "INFO")
        return values
