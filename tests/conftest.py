# tests/conftest.py
from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib

matplotlib.use("Agg")

import pytest
import torch

from tradevision.bars import Bar
from tradevision.config import EngineConfig, build_default_config

START_TIME = 1_700_000_000
DAY = 86400


def bars_from_closes(closes: Sequence[float], *, start: int = START_TIME) -> list[Bar]:
    """Flat-wick bars whose open equals the previous close."""
    bars = []
    previous = closes[0]
    for idx, close in enumerate(closes):
        bars.append(
            Bar(
                time=start + idx * DAY,
                open=previous,
                high=max(previous, close),
                low=min(previous, close),
                close=close,
            )
        )
        previous = close
    return bars


@pytest.fixture
def config() -> EngineConfig:
    return build_default_config(device=torch.device("cpu"))


@pytest.fixture
def make_bars():
    return bars_from_closes


@pytest.fixture
def generator() -> torch.Generator:
    gen = torch.Generator(device="cpu")
    gen.manual_seed(1234)
    return gen


@pytest.fixture
def write_csv(tmp_path: Path):
    def _write(lines: Sequence[str], name: str = "history.csv") -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
