# Project: weather-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
config.py — Load and validate the TOML configuration file.

We use tomllib (Python 3.11+ stdlib) so no extra install is needed.
The config path defaults to "config.toml" in the current working directory,
but can be overridden for testing. The CLI falls back to DEFAULT_CONFIG
when no file exists.
"""

import tomllib
from pathlib import Path

from weather_outlook.conditions import Thresholds


DEFAULT_CONFIG_PATH = Path("config.toml")

DEFAULT_CONFIG = {
    "history": {
        "lookback_years": 20,
        "timeout": 30.0,
        "precipitation": False,
    },
    "thresholds": {
        "wind_speed": 10.0,
        "very_hot": 35.0,
        "very_cold": 5.0,
        "humid": 80.0,
    },
    "log": {
        "path": "logs/weather_outlook.log",
    },
}


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> dict:
    """Load and validate a TOML configuration file.

    Args:
        path: Path to the TOML config file.

    Returns:
        Nested dict of configuration values.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If required keys or sections are missing or invalid.
    """
    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {path}\n"
            "Copy config.toml.example to config.toml and adjust it."
        )

    with open(path, "rb") as f:
        config = tomllib.load(f)

    _validate(config)
    return config


def load_config_or_default(path: Path = DEFAULT_CONFIG_PATH) -> dict:
    """Like load_config, but return DEFAULT_CONFIG when the file is missing."""
    if not path.exists():
        return DEFAULT_CONFIG
    return load_config(path)


def thresholds_from_config(config: dict) -> Thresholds:
    """Build classification Thresholds from the [thresholds] section."""
    section = config["thresholds"]
    return Thresholds(
        wind_speed=float(section["wind_speed"]),
        very_hot=float(section["very_hot"]),
        very_cold=float(section["very_cold"]),
        humid=float(section["humid"]),
    )


def _validate(config: dict) -> None:
    """Validate that all required config sections and keys are present.

    Expected config schema::

        [history]
        lookback_years = <int>    # years before the current one, >= 1
        timeout        = <float>  # seconds per NASA POWER request
        precipitation  = <bool>   # also collect precipitation

        [thresholds]
        wind_speed = <float>      # m/s, above → Windy
        very_hot   = <float>      # °C, above → VeryHot
        very_cold  = <float>      # °C, below → VeryCold
        humid      = <float>      # %, above → Humid

        [log]
        path = <str>              # relative or absolute path to the log file

    Args:
        config: Parsed TOML config dict.

    Raises:
        ValueError: If any required section or key is absent or out of range.
    """
    required_sections = ["history", "thresholds", "log"]
    for section in required_sections:
        if section not in config:
            raise ValueError(f"Missing required config section: [{section}]")

    history = config["history"]
    for key in ("lookback_years", "timeout", "precipitation"):
        if key not in history:
            raise ValueError(f"Missing required config key: [history].{key}")
    lookback = history["lookback_years"]
    if isinstance(lookback, bool) or not isinstance(lookback, int) or lookback < 1:
        raise ValueError("[history].lookback_years must be a positive integer")
    if history["timeout"] <= 0:
        raise ValueError("[history].timeout must be greater than 0")

    thresholds = config["thresholds"]
    for key in ("wind_speed", "very_hot", "very_cold", "humid"):
        if key not in thresholds:
            raise ValueError(f"Missing required config key: [thresholds].{key}")

    if "path" not in config["log"]:
        raise ValueError("Missing required config key: [log].path")
