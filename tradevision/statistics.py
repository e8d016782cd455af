"""Summary statistics for a synthetic bar path."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import torch

from .bars import Bar, closes_tensor


@dataclass
class PathSummary:
    n_bars: int
    first_open: float
    last_close: float
    total_return: float
    realized_volatility: float
    max_high: float
    min_low: float


def summarize_path(bars: Sequence[Bar], *, dtype: torch.dtype = torch.float64) -> PathSummary:
    if not bars:
        raise ValueError("Cannot summarise an empty path.")

    first_open = bars[0].open
    # Prepend the first open so a single bar still yields one return.
    closes = torch.cat(
        (
            torch.tensor([first_open], dtype=dtype),
            closes_tensor(bars, dtype=dtype),
        )
    )
    returns = (closes[1:] - closes[:-1]) / closes[:-1]
    volatility = returns.std(correction=0)
    highs = torch.tensor([bar.high for bar in bars], dtype=dtype)
    lows = torch.tensor([bar.low for bar in bars], dtype=dtype)

    return PathSummary(
        n_bars=len(bars),
        first_open=float(first_open),
        last_close=float(bars[-1].close),
        total_return=float(((closes[-1] - closes[0]) / closes[0]).cpu()),
        realized_volatility=float(volatility.cpu()),
        max_high=float(highs.max().cpu()),
        min_low=float(lows.min().cpu()),
    )
