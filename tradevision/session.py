"""Explicit session state tying history, regime and simulated path together."""
from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .bars import Bar, validate_series
from .regime import RegimeClassifier, RegimeEstimate
from .simulator import ForwardSimulator, SimulationCursor


class BarSink(Protocol):
    """Rendering target: full history replace on load, single-bar append on advance."""

    def set_history(self, bars: Sequence[Bar]) -> None: ...

    def append(self, bar: Bar) -> None: ...


class SimulationSession:
    """Owns the loaded history and the cursor advanced by the forward simulator."""

    def __init__(
        self,
        classifier: RegimeClassifier,
        simulator: ForwardSimulator,
        sink: BarSink | None = None,
    ) -> None:
        self.classifier = classifier
        self.simulator = simulator
        self.sink = sink
        self.history: tuple[Bar, ...] = ()
        self.cursor = SimulationCursor()
        self.regime: Optional[RegimeEstimate] = None
        self.simulated: list[Bar] = []

    @property
    def is_ready(self) -> bool:
        return self.cursor.last_bar is not None

    def reset(self) -> None:
        self.history = ()
        self.cursor = SimulationCursor()
        self.regime = None
        self.simulated = []

    def on_history_loaded(self, series: Sequence[Bar]) -> Optional[RegimeEstimate]:
        """Replace the history and start a fresh cursor at its tail.

        Returns the new estimate, or ``None`` when the history is shorter than
        the classification window. In that case :attr:`regime` keeps whatever
        was shown before.
        """
        history = validate_series(series)
        estimate = self.classifier.classify(history)

        self.history = history
        self.simulated = []
        self.cursor = SimulationCursor(
            last_bar=history[-1] if history else None,
            volatility=estimate.volatility if estimate is not None else 0.0,
        )
        if estimate is not None:
            self.regime = estimate

        if self.sink is not None:
            self.sink.set_history(history)
        return estimate

    def on_advance_requested(self) -> Optional[Bar]:
        if not self.is_ready:
            return None
        bar = self.simulator.step(self.cursor)
        self.simulated.append(bar)
        if self.sink is not None:
            self.sink.append(bar)
        return bar

    def advance(self, n_bars: int) -> list[Bar]:
        if n_bars < 0:
            raise ValueError("Number of bars must be non-negative.")
        produced: list[Bar] = []
        for _ in range(n_bars):
            bar = self.on_advance_requested()
            if bar is None:
                break
            produced.append(bar)
        return produced
