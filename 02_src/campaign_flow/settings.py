"""Runtime configuration loaded from the environment and an optional .env file."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class FlowSettings:
    id_stride: int = 4
    layout_x: float = 250.0
    layout_spacing: float = 100.0
    log_level: str = "INFO"


def load_settings(env_file: Optional[str] = None) -> FlowSettings:
    load_dotenv(env_file)
    defaults = FlowSettings()
    return FlowSettings(
        id_stride=_read_int("CAMPAIGN_FLOW_ID_STRIDE", defaults.id_stride),
        layout_x=_read_float("CAMPAIGN_FLOW_LAYOUT_X", defaults.layout_x),
        layout_spacing=_read_float("CAMPAIGN_FLOW_LAYOUT_SPACING", defaults.layout_spacing),
        log_level=_read_log_level("CAMPAIGN_FLOW_LOG_LEVEL", defaults.log_level),
    )


def _read_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise RuntimeError(f"{name} must be positive, got {value}")
    return value


def _read_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from None


def _read_log_level(name: str, default: str) -> str:
    value = (os.getenv(name) or default).strip().upper()
    if value not in LOG_LEVELS:
        raise RuntimeError(f"{name} must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
    return value

