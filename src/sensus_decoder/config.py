"""Configuration management for the dive decoders."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List

import yaml

from . import units

UINT32_MAX = 0xFFFFFFFF

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class CalibrationConfig:
    """Depth calibration applied to pressure readings."""

    atmospheric: float = units.ATM  # Pa
    hydrostatic: float = units.hydrostatic_coefficient()  # Pa/m


@dataclass
class ClockConfig:
    """Device clock reading and the host time (Unix seconds) it was taken at."""

    devtime: int = 0
    systime: int = 0


@dataclass
class LoggingConfig:
    """Configuration for stdlib logging."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    datefmt: str = "%H:%M:%S"


@dataclass
class AppConfig:
    """Main application configuration."""

    calibration: CalibrationConfig = None
    clock: ClockConfig = None
    logging: LoggingConfig = None

    def __post_init__(self) -> None:
        if self.calibration is None:
            self.calibration = CalibrationConfig()
        if self.clock is None:
            self.clock = ClockConfig()
        if self.logging is None:
            self.logging = LoggingConfig()


def load_config(config_path: str) -> AppConfig:
    """Load configuration from YAML file with environment variable support."""
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_file.open("r", encoding="utf-8") as f:
        raw_config = yaml.safe_load(f)

    if not raw_config:
        raise ValueError(f"Empty or invalid configuration file: {config_path}")

    # Process environment variable substitutions
    _substitute_env_vars(raw_config)

    config = AppConfig()

    if "calibration" in raw_config:
        calibration_data = raw_config["calibration"] or {}
        config.calibration = CalibrationConfig(
            **{key: float(value) for key, value in calibration_data.items()}
        )

    if "clock" in raw_config:
        clock_data = raw_config["clock"] or {}
        config.clock = ClockConfig(**{key: int(value) for key, value in clock_data.items()})

    if "logging" in raw_config:
        logging_data = raw_config["logging"] or {}
        if "level" in logging_data:
            logging_data["level"] = str(logging_data["level"]).upper()
        config.logging = LoggingConfig(**logging_data)

    return config


def _substitute_env_vars(data: Any) -> None:
    """Recursively substitute environment variables in configuration data."""
    if isinstance(data, dict):
        for key, value in data.items():
            if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
                env_var = value[2:-1]
                data[key] = os.getenv(env_var, value)
            else:
                _substitute_env_vars(value)


def validate_config(config: AppConfig) -> List[str]:
    """Validate configuration and return list of validation errors."""
    errors = []

    if config.calibration.hydrostatic <= 0:
        errors.append("Calibration hydrostatic must be positive")
    if config.calibration.atmospheric < 0:
        errors.append("Calibration atmospheric must not be negative")

    if not 0 <= config.clock.devtime <= UINT32_MAX:
        errors.append(f"Clock devtime must fit in 32 bits: {config.clock.devtime}")

    if config.logging.level not in LOG_LEVELS:
        errors.append(f"Unknown logging level: {config.logging.level}")

    return errors


def log_level(config: LoggingConfig) -> int:
    """Numeric logging level for a validated `LoggingConfig`."""
    return getattr(logging, config.level, logging.INFO)
