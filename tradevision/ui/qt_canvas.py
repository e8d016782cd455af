"""Matplotlib canvas that acts as the session's bar sink inside Qt."""
from __future__ import annotations

from pathlib import Path
from typing import Sequence

from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg
from matplotlib.figure import Figure

from tradevision.bars import Bar
from tradevision.visualization import CandlestickChart

_FACE = "#000000"
_FG = "#d1d4dc"
_GRID = (42 / 255, 46 / 255, 57 / 255, 0.5)
_BORDER = "#485c7b"


class ChartCanvas(FigureCanvasQTAgg):
    """Candlestick canvas with full-history replace and single-bar append."""

    def __init__(self, *, step_seconds: float, parent=None) -> None:  # type: ignore[override]
        figure = Figure(figsize=(11.0, 6.0), constrained_layout=True)
        super().__init__(figure)
        if parent is not None:
            self.setParent(parent)

        ax = figure.add_subplot(1, 1, 1)
        self.chart = CandlestickChart(ax=ax, step_seconds=step_seconds, title="")
        self._apply_axis_style()

    def _apply_axis_style(self) -> None:
        ax = self.chart.ax
        self.figure.set_facecolor(_FACE)
        ax.set_facecolor(_FACE)
        ax.tick_params(colors=_FG, which="both")
        ax.xaxis.label.set_color(_FG)
        ax.yaxis.label.set_color(_FG)
        ax.grid(True, color=_GRID, linewidth=0.8)
        for spine in ax.spines.values():
            spine.set_color(_BORDER)

    def set_history(self, bars: Sequence[Bar]) -> None:
        self.chart.set_history(bars)
        self._apply_axis_style()
        self.draw_idle()

    def append(self, bar: Bar) -> None:
        self.chart.append(bar)
        self.draw_idle()

    def export_png(self, path: Path) -> None:
        self.chart.save(path)
