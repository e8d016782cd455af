"""OHLC bar records and helpers for ordered bar series."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import torch


@dataclass(frozen=True)
class Bar:
    """One OHLC observation stamped with Unix-epoch seconds."""

    time: int
    open: float
    high: float
    low: float
    close: float


def validate_series(series: Sequence[Bar]) -> tuple[Bar, ...]:
    """Return the series as a tuple, checking timestamps never go backwards."""
    bars = tuple(series)
    for previous, current in zip(bars, bars[1:]):
        if current.time < previous.time:
            raise ValueError(
                f"Bar series must be ordered by time ({current.time} follows {previous.time})."
            )
    return bars


def closes_tensor(
    series: Sequence[Bar],
    *,
    dtype: torch.dtype = torch.float64,
    device: torch.device = torch.device("cpu"),
) -> torch.Tensor:
    return torch.tensor([bar.close for bar in series], dtype=dtype, device=device)
