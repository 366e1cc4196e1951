import pytest

from config import BaseConfiguration, ConfigurationError, DesktopConfiguration
from pairs.ui_logic.grid_layout import DeviceClass

ENV_NAMES = [
    "PAIRS_ROWS", "PAIRS_COLS", "PAIRS_SYMBOL_COUNT", "PAIRS_TIME_BUDGET_SECONDS",
    "PAIRS_MISMATCH_DELAY_MS", "PAIRS_TICK_INTERVAL_MS", "PAIRS_DEVICE_CLASS",
    "PAIRS_WINDOW_WIDTH", "PAIRS_WINDOW_HEIGHT", "PAIRS_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults_describe_four_by_four():
    config = BaseConfiguration()
    assert (config.rows, config.cols, config.symbol_count) == (4, 4, 8)
    assert config.time_budget_seconds == 60
    assert config.mismatch_recovery_delay_ms == 300
    assert config.tick_interval_ms == 1000
    assert config.total_cards == 16


@pytest.mark.parametrize("kwargs", [
    {"rows": 3, "cols": 3, "symbol_count": 4},
    {"rows": 4, "cols": 4, "symbol_count": 6},
    {"rows": 0},
    {"time_budget_seconds": 0},
    {"mismatch_recovery_delay_ms": -1},
    {"tick_interval_ms": 0},
])
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ConfigurationError):
        BaseConfiguration(**kwargs)


def test_from_env(monkeypatch):
    monkeypatch.setenv("PAIRS_ROWS", "2")
    monkeypatch.setenv("PAIRS_COLS", "3")
    monkeypatch.setenv("PAIRS_SYMBOL_COUNT", "3")
    monkeypatch.setenv("PAIRS_TIME_BUDGET_SECONDS", "30")
    monkeypatch.setenv("PAIRS_MISMATCH_DELAY_MS", "")

    config = BaseConfiguration.from_env()
    assert (config.rows, config.cols, config.symbol_count) == (2, 3, 3)
    assert config.time_budget_seconds == 30
    assert config.mismatch_recovery_delay_ms == 300


def test_from_env_rejects_non_integers(monkeypatch):
    monkeypatch.setenv("PAIRS_ROWS", "four")
    with pytest.raises(ConfigurationError, match="PAIRS_ROWS"):
        BaseConfiguration.from_env()


def test_desktop_from_env(monkeypatch):
    monkeypatch.setenv("PAIRS_DEVICE_CLASS", "Compact")
    monkeypatch.setenv("PAIRS_WINDOW_WIDTH", "390")
    monkeypatch.setenv("PAIRS_WINDOW_HEIGHT", "844")
    monkeypatch.setenv("PAIRS_LOG_LEVEL", "debug")

    config = DesktopConfiguration.from_env()
    assert config.device_class is DeviceClass.COMPACT
    assert (config.window_width, config.window_height) == (390, 844)
    assert config.log_level_value == 10
    assert config.rows == 4


def test_desktop_rejects_unknown_values(monkeypatch):
    monkeypatch.setenv("PAIRS_DEVICE_CLASS", "watch")
    with pytest.raises(ConfigurationError):
        DesktopConfiguration.from_env()

    with pytest.raises(ConfigurationError):
        DesktopConfiguration(log_level="chatty")


def test_desktop_rejects_non_string_log_level():
    with pytest.raises(ConfigurationError):
        DesktopConfiguration(log_level=10)
