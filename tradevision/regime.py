"""Trailing-window regime classification."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

import torch

from .bars import Bar, closes_tensor
from .config import EngineConfig
from .errors import DegenerateReference, InsufficientData


class RegimeLabel(str, Enum):
    STRONG_BULL = "STRONG BULL"
    STRONG_BEAR = "STRONG BEAR"
    VOLATILE_CHOP = "VOLATILE CHOP"
    NEUTRAL = "NEUTRAL"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RegimeEstimate:
    """Return statistics of the trailing window and the derived label."""

    volatility: float
    change: float
    mean_return: float
    label: RegimeLabel


def label_for(change: float, volatility: float, config: EngineConfig) -> RegimeLabel:
    """Apply the label rules in priority order; all comparisons are strict."""
    if change > config.trend_threshold:
        return RegimeLabel.STRONG_BULL
    if change < -config.trend_threshold:
        return RegimeLabel.STRONG_BEAR
    if volatility > config.volatility_threshold:
        return RegimeLabel.VOLATILE_CHOP
    return RegimeLabel.NEUTRAL


class RegimeClassifier:
    """Labels the recent market regime from the last ``config.window`` closes."""

    def __init__(self, config: EngineConfig) -> None:
        self.config = config

    def estimate(self, series: Sequence[Bar]) -> RegimeEstimate:
        window = self.config.window
        if len(series) < window:
            raise InsufficientData(len(series), window)

        # float64 regardless of config.dtype so the strict thresholds compare exactly.
        closes = closes_tensor(series[-window:], dtype=torch.float64, device=self.config.device)
        if not bool(torch.all(torch.isfinite(closes))) or bool(torch.any(closes == 0)):
            raise DegenerateReference("Classification window contains a zero or non-finite close.")

        previous = closes[:-1]
        returns = (closes[1:] - previous) / previous

        # Population statistics: divide by the number of returns, not n - 1.
        mean = returns.mean()
        variance = (returns - mean).pow(2).mean()
        volatility = float(torch.sqrt(variance).cpu())

        first = closes[0]
        change = float(((closes[-1] - first) / first).cpu())

        return RegimeEstimate(
            volatility=volatility,
            change=change,
            mean_return=float(mean.cpu()),
            label=label_for(change, volatility, self.config),
        )

    def classify(self, series: Sequence[Bar]) -> Optional[RegimeEstimate]:
        """Like :meth:`estimate`, but returns ``None`` when the series is too short."""
        try:
            return self.estimate(series)
        except InsufficientData:
            return None
