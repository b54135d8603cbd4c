"""Load bot settings from a TOML file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any
import tomllib

DEFAULT_DATA_FILE = Path("ratings.json")
DEFAULT_LOG_LEVEL = "INFO"
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class BotConfig:
    """Runtime settings for the rating bot."""

    data_file: Path = DEFAULT_DATA_FILE
    log_level: str = DEFAULT_LOG_LEVEL
    file_path: Path | None = None


def load_bot_config(config_path: Path) -> BotConfig:
    """Load and validate one bot config file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    if not config_path.is_file():
        raise ValueError(f"Config path is not a file: {config_path}")

    with config_path.open("rb") as file:
        raw = tomllib.load(file)
    return _parse_bot_config(raw, config_path)


def _parse_bot_config(raw: dict[str, Any], file_path: Path) -> BotConfig:
    storage_raw = raw.get("storage", {})
    logging_raw = raw.get("logging", {})
    if not isinstance(storage_raw, dict):
        raise ValueError(f"{file_path}: [storage] must be a table")
    if not isinstance(logging_raw, dict):
        raise ValueError(f"{file_path}: [logging] must be a table")

    data_file_value = str(storage_raw.get("data_file", DEFAULT_DATA_FILE)).strip()
    if not data_file_value:
        raise ValueError(f"{file_path}: [storage].data_file must not be empty")
    data_file = Path(data_file_value)
    if not data_file.is_absolute():
        data_file = file_path.parent / data_file

    log_level = str(logging_raw.get("level", DEFAULT_LOG_LEVEL)).strip().upper()
    if log_level not in _LOG_LEVELS:
        raise ValueError(
            f"{file_path}: [logging].level must be one of {', '.join(_LOG_LEVELS)}, got {log_level!r}"
        )

    return BotConfig(data_file=data_file, log_level=log_level, file_path=file_path)


__all__ = ["BotConfig", "load_bot_config"]
