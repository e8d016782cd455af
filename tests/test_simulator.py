import math

import pytest
import torch

from tradevision.bars import Bar
from tradevision.errors import DegenerateReference, InvalidVolatility
from tradevision.simulator import ForwardSimulator, SimulationCursor


def _reference(close: float = 100.0, time: int = 1_700_000_000) -> Bar:
    return Bar(time=time, open=close, high=close, low=close, close=close)


def _seeded(seed: int) -> torch.Generator:
    gen = torch.Generator(device="cpu")
    gen.manual_seed(seed)
    return gen


def test_zero_volatility_yields_flat_bar(config, generator):
    simulator = ForwardSimulator(config, generator=generator)
    cursor = SimulationCursor(last_bar=_reference(), volatility=0.0)

    bar = simulator.step(cursor)

    assert bar == Bar(time=1_700_086_400, open=100.0, high=100.0, low=100.0, close=100.0)
    assert cursor.last_bar is bar


def test_zero_volatility_is_flat_for_any_draws(config):
    for seed in range(20):
        simulator = ForwardSimulator(config, generator=_seeded(seed))
        cursor = SimulationCursor(last_bar=_reference(42.5), volatility=0.0)
        bar = simulator.step(cursor)
        assert bar.open == bar.close == bar.high == bar.low == 42.5


def test_steps_chain_and_advance_one_day(config, generator):
    simulator = ForwardSimulator(config, generator=generator)
    cursor = SimulationCursor(last_bar=_reference(), volatility=0.02)

    previous = cursor.last_bar
    for _ in range(50):
        bar = simulator.step(cursor)
        assert bar.time == previous.time + 86400
        assert bar.open == previous.close
        assert bar.high >= max(bar.open, bar.close)
        assert bar.low <= min(bar.open, bar.close)
        previous = bar
    assert cursor.last_bar is previous


def test_step_follows_box_muller_on_the_draw_stream(config):
    simulator = ForwardSimulator(config, generator=_seeded(99))
    cursor = SimulationCursor(last_bar=_reference(250.0), volatility=0.015)
    bar = simulator.step(cursor)

    draws = torch.rand((5,), generator=_seeded(99), dtype=torch.float64).tolist()
    z = math.sqrt(-2.0 * math.log(1.0 - draws[1])) * math.cos(2.0 * math.pi * draws[2])
    close = 250.0 * (1 + z * 0.015)
    assert bar.close == pytest.approx(close, rel=1e-15)
    assert bar.high == pytest.approx(max(250.0, close) * (1 + draws[3] * 0.015 * 0.5), rel=1e-15)
    assert bar.low == pytest.approx(min(250.0, close) * (1 - draws[4] * 0.015 * 0.5), rel=1e-15)
    assert simulator.last_direction == (1 if draws[0] > 0.5 else -1)


def test_same_seed_reproduces_path(config):
    paths = []
    for _ in range(2):
        simulator = ForwardSimulator(config, generator=_seeded(7))
        cursor = SimulationCursor(last_bar=_reference(), volatility=0.03)
        paths.append(simulator.simulate(cursor, 25))
    assert paths[0] == paths[1]


def test_simulate_returns_requested_number_of_bars(config, generator):
    simulator = ForwardSimulator(config, generator=generator)
    cursor = SimulationCursor(last_bar=_reference(), volatility=0.01)
    bars = simulator.simulate(cursor, 12)
    assert len(bars) == 12
    assert cursor.last_bar == bars[-1]
    assert simulator.simulate(cursor, 0) == []
    with pytest.raises(ValueError):
        simulator.simulate(cursor, -1)


def test_shock_scale_tracks_volatility(config):
    simulator = ForwardSimulator(config, generator=_seeded(2024))
    cursor = SimulationCursor(last_bar=_reference(), volatility=0.02)
    returns = []
    for _ in range(4000):
        bar = simulator.step(cursor)
        returns.append((bar.close - bar.open) / bar.open)
        cursor.last_bar = _reference()
    sample = torch.tensor(returns, dtype=torch.float64)
    assert float(sample.std()) == pytest.approx(0.02, rel=0.1)
    assert abs(float(sample.mean())) < 0.002


@pytest.mark.parametrize("volatility", [-0.01, math.nan, math.inf])
def test_invalid_volatility_rejected_before_drawing(config, volatility):
    generator = _seeded(5)
    simulator = ForwardSimulator(config, generator=generator)
    cursor = SimulationCursor(last_bar=_reference(), volatility=volatility)

    with pytest.raises(InvalidVolatility):
        simulator.step(cursor)

    untouched = torch.rand((1,), generator=_seeded(5), dtype=torch.float64)
    assert torch.equal(torch.rand((1,), generator=generator, dtype=torch.float64), untouched)
    assert cursor.last_bar == _reference()


@pytest.mark.parametrize("close", [0.0, math.nan, math.inf])
def test_degenerate_reference_rejected(config, generator, close):
    simulator = ForwardSimulator(config, generator=generator)
    cursor = SimulationCursor(last_bar=_reference(close), volatility=0.01)
    with pytest.raises(DegenerateReference):
        simulator.step(cursor)


def test_missing_reference_rejected(config, generator):
    simulator = ForwardSimulator(config, generator=generator)
    with pytest.raises(DegenerateReference):
        simulator.step(SimulationCursor())
