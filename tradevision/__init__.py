"""Regime classification and stochastic forward-bar simulation for OHLC series."""
from .bars import Bar, validate_series
from .config import EngineConfig, build_default_config
from .errors import DegenerateReference, InsufficientData, InvalidVolatility, TradeVisionError
from .ingest import bars_from_frame, load_bars_csv
from .regime import RegimeClassifier, RegimeEstimate, RegimeLabel, label_for
from .session import BarSink, SimulationSession
from .simulator import ForwardSimulator, SimulationCursor
from .statistics import PathSummary, summarize_path

__all__ = [
    "Bar",
    "BarSink",
    "DegenerateReference",
    "EngineConfig",
    "ForwardSimulator",
    "InsufficientData",
    "InvalidVolatility",
    "PathSummary",
    "RegimeClassifier",
    "RegimeEstimate",
    "RegimeLabel",
    "SimulationCursor",
    "SimulationSession",
    "TradeVisionError",
    "bars_from_frame",
    "build_default_config",
    "label_for",
    "load_bars_csv",
    "summarize_path",
    "validate_series",
]
