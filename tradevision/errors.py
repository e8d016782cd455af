"""Exceptions raised by the regime and forward-bar engines."""
from __future__ import annotations


class TradeVisionError(ValueError):
    """Base class for engine errors."""


class InsufficientData(TradeVisionError):
    """Raised when a series is shorter than the classification window."""

    def __init__(self, available: int, required: int) -> None:
        super().__init__(f"Need at least {required} bars to classify, got {available}.")
        self.available = available
        self.required = required


class DegenerateReference(TradeVisionError):
    """Raised when a reference close is zero, non-finite or missing."""


class InvalidVolatility(TradeVisionError):
    """Raised when a volatility parameter is negative or non-finite."""
