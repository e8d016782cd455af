"""Random-walk forward-bar generation driven by an estimated volatility."""
from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Optional

import torch

from .bars import Bar
from .config import EngineConfig
from .errors import DegenerateReference, InvalidVolatility

# direction, u, v, high wick, low wick
DRAWS_PER_STEP = 5


@dataclass
class SimulationCursor:
    """Mutable reference point for the next synthetic bar."""

    last_bar: Optional[Bar] = None
    volatility: float = 0.0


class ForwardSimulator:
    """Generates one synthetic bar per call, chaining from the cursor's last bar."""

    def __init__(self, config: EngineConfig, generator: torch.Generator | None = None) -> None:
        self.config = config
        if generator is None:
            generator = torch.Generator(device=config.device)
            generator.manual_seed(torch.seed())
        self.generator = generator
        self.last_direction = 0

    def _validate(self, cursor: SimulationCursor) -> Bar:
        volatility = cursor.volatility
        if not math.isfinite(volatility) or volatility < 0:
            raise InvalidVolatility(f"Volatility must be finite and non-negative, got {volatility}.")
        reference = cursor.last_bar
        if reference is None:
            raise DegenerateReference("Cursor has no reference bar; load a history first.")
        if not math.isfinite(reference.close) or reference.close == 0:
            raise DegenerateReference(f"Reference close must be finite and non-zero, got {reference.close}.")
        return reference

    def step(self, cursor: SimulationCursor) -> Bar:
        reference = self._validate(cursor)
        volatility = cursor.volatility

        draws = torch.rand(
            (DRAWS_PER_STEP,),
            generator=self.generator,
            dtype=torch.float64,
            device=self.config.device,
        ).tolist()
        # Drawn to keep the random stream aligned; the shock sign comes from z alone.
        self.last_direction = 1 if draws[0] > 0.5 else -1

        # Box-Muller; 1 - u keeps the logarithm argument in (0, 1].
        u = 1.0 - draws[1]
        v = draws[2]
        z = math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)
        shock = z * volatility

        new_open = reference.close
        new_close = new_open * (1 + shock)

        wick = volatility * self.config.wick_scale
        high = max(new_open, new_close) * (1 + draws[3] * wick)
        low = min(new_open, new_close) * (1 - draws[4] * wick)

        bar = Bar(
            time=reference.time + self.config.step_seconds,
            open=new_open,
            high=high,
            low=low,
            close=new_close,
        )
        cursor.last_bar = bar
        return bar

    def simulate(self, cursor: SimulationCursor, n_steps: int) -> list[Bar]:
        """Chain ``n_steps`` calls to :meth:`step`."""
        if n_steps < 0:
            raise ValueError("Number of steps must be non-negative.")
        return [self.step(cursor) for _ in range(n_steps)]
