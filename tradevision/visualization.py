"""Matplotlib candlestick rendering for historical and synthetic bars."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle

from .bars import Bar


__all__ = (
    "CandleStyle",
    "HISTORY_STYLE",
    "SIMULATED_STYLE",
    "draw_candles",
    "CandlestickChart",
    "plot_session",
)


@dataclass(frozen=True)
class CandleStyle:
    up_color: str
    down_color: str
    edge_color: str | None = None


HISTORY_STYLE = CandleStyle(up_color="#089981", down_color="#f23645")
SIMULATED_STYLE = CandleStyle(up_color="#00FFFF", down_color="#FF00FF", edge_color="#00FFFF")


def _body_width(bars: Sequence[Bar], fallback: float) -> float:
    if len(bars) < 2:
        return fallback * 0.7
    spacing = np.diff(np.array([bar.time for bar in bars], dtype=float))
    positive = spacing[spacing > 0]
    if positive.size == 0:
        return fallback * 0.7
    return float(np.median(positive)) * 0.7


def draw_candles(ax: plt.Axes, bars: Sequence[Bar], *, style: CandleStyle, width: float) -> None:
    for bar in bars:
        color = style.up_color if bar.close >= bar.open else style.down_color
        ax.vlines(bar.time, bar.low, bar.high, color=color, linewidth=1.0)
        bottom = min(bar.open, bar.close)
        height = abs(bar.close - bar.open)
        ax.add_patch(
            Rectangle(
                (bar.time - width / 2, bottom),
                width,
                height,
                facecolor=color,
                edgecolor=style.edge_color or color,
                linewidth=0.8 if style.edge_color else 0.0,
            )
        )


class CandlestickChart:
    """Bar sink that redraws history on load and appends synthetic bars one at a time."""

    def __init__(
        self,
        *,
        ax: plt.Axes | None = None,
        step_seconds: float = 86400.0,
        title: str = "Price history with simulated continuation",
    ) -> None:
        if ax is None:
            fig, ax = plt.subplots(figsize=(11.0, 5.5))
        else:
            fig = ax.figure
        self.fig = fig
        self.ax = ax
        self.title = title
        self.step_seconds = step_seconds
        self._width = step_seconds * 0.7
        self._bars: list[Bar] = []
        self._prepare_axes()

    def _prepare_axes(self) -> None:
        self.ax.set_title(self.title)
        self.ax.set_xlabel("Time (Unix seconds)")
        self.ax.set_ylabel("Price")
        self.ax.grid(True, alpha=0.2)

    def set_history(self, bars: Sequence[Bar]) -> None:
        self.ax.clear()
        self._prepare_axes()
        self._bars = list(bars)
        self._width = _body_width(self._bars, self.step_seconds)
        draw_candles(self.ax, self._bars, style=HISTORY_STYLE, width=self._width)
        self._rescale()

    def append(self, bar: Bar) -> None:
        self._bars.append(bar)
        draw_candles(self.ax, [bar], style=SIMULATED_STYLE, width=self._width)
        self._rescale()

    @property
    def bar_count(self) -> int:
        return len(self._bars)

    def _rescale(self) -> None:
        if not self._bars:
            return
        times = np.array([bar.time for bar in self._bars], dtype=float)
        y_min = min(bar.low for bar in self._bars)
        y_max = max(bar.high for bar in self._bars)
        if np.isclose(y_min, y_max):
            y_min -= 1.0
            y_max += 1.0
        margin = 0.05 * (y_max - y_min)
        pad = self._width
        self.ax.set_xlim(float(times.min()) - pad, float(times.max()) + pad)
        self.ax.set_ylim(y_min - margin, y_max + margin)

    def save(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.fig.savefig(path, dpi=150, bbox_inches="tight")
        return path


def plot_session(
    history: Sequence[Bar],
    simulated: Sequence[Bar],
    *,
    step_seconds: float = 86400.0,
) -> Tuple[plt.Figure, plt.Axes]:
    chart = CandlestickChart(step_seconds=step_seconds)
    chart.set_history(history)
    for bar in simulated:
        chart.append(bar)
    return chart.fig, chart.ax
