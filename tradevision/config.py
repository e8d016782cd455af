"""Configuration for regime classification and forward-bar simulation."""
from __future__ import annotations

from dataclasses import dataclass

import torch

SECONDS_PER_DAY = 86400


@dataclass(frozen=True)
class EngineConfig:
    """Window size, label thresholds and bar-generation constants."""

    window: int = 20
    trend_threshold: float = 0.05
    volatility_threshold: float = 0.02
    step_seconds: int = SECONDS_PER_DAY
    wick_scale: float = 0.5
    device: torch.device = torch.device("cpu")
    dtype: torch.dtype = torch.float64

    def __post_init__(self) -> None:
        if self.window < 2:
            raise ValueError("Window must contain at least two bars.")
        if self.trend_threshold <= 0:
            raise ValueError("Trend threshold must be positive.")
        if self.volatility_threshold < 0:
            raise ValueError("Volatility threshold must be non-negative.")
        if self.step_seconds <= 0:
            raise ValueError("Bar step must be a positive number of seconds.")
        if self.wick_scale < 0:
            raise ValueError("Wick scale must be non-negative.")
        if not self.dtype.is_floating_point:
            raise ValueError("Engine dtype must be a floating point type.")


def build_default_config(*, device: torch.device, dtype: torch.dtype = torch.float64) -> EngineConfig:
    """Factory for the 20-bar window, 5% trend and 2% volatility setup."""
    return EngineConfig(device=device, dtype=dtype)
