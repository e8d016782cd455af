"""Runtime helpers shared by the CLI, rich and Qt front ends."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import torch

from .config import EngineConfig, build_default_config
from .regime import RegimeClassifier
from .session import BarSink, SimulationSession
from .simulator import ForwardSimulator


@dataclass(frozen=True)
class SessionContext:
    """Holds the configured session and the engine settings behind it."""

    config: EngineConfig
    session: SimulationSession
    seed: Optional[int]


def resolve_device(device_arg: str) -> torch.device:
    if device_arg == "auto":
        if torch.cuda.is_available():
            return torch.device("cuda")
        return torch.device("cpu")
    device = torch.device(device_arg)
    if device.type == "cuda" and not torch.cuda.is_available():
        raise RuntimeError("CUDA requested but not available.")
    return device


def precision_to_dtype(precision: str) -> torch.dtype:
    return torch.float64 if precision == "float64" else torch.float32


def manual_seed_or_random(generator: torch.Generator, seed: Optional[int]) -> None:
    if seed is not None:
        generator.manual_seed(seed)
    else:
        generator.manual_seed(torch.seed())


def create_session_context(
    *,
    device: str = "cpu",
    precision: str = "float64",
    seed: Optional[int] = None,
    sink: BarSink | None = None,
) -> SessionContext:
    resolved_device = resolve_device(device)
    dtype = precision_to_dtype(precision)

    generator = torch.Generator(device=resolved_device)
    manual_seed_or_random(generator, seed)

    config = build_default_config(device=resolved_device, dtype=dtype)
    session = SimulationSession(
        classifier=RegimeClassifier(config),
        simulator=ForwardSimulator(config, generator=generator),
        sink=sink,
    )
    return SessionContext(config=config, session=session, seed=seed)


def fmt(value: float) -> str:
    return f"{value:.6f}"
