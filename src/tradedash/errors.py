"""Error taxonomy for the backtest core."""

from __future__ import annotations


class BacktestError(Exception):
    """Base class for every error raised by the backtest core."""


class InvalidConfigurationError(BacktestError, ValueError):
    """Options or combiner settings that cannot produce a meaningful run."""


class MalformedInputError(BacktestError, ValueError):
    """Candle data that violates ordering or price constraints."""


class InsufficientDataError(BacktestError):
    """A series is shorter than the indicator warm-up window."""

    def __init__(self, symbol: str, timeframe: str, available: int, required: int) -> None:
        super().__init__(
            f"{symbol} {timeframe}: {available} candles available, {required} required"
        )
        self.symbol = symbol
        self.timeframe = timeframe
        self.available = available
        self.required = required


class BacktestCancelledError(BacktestError):
    """The caller signalled cancellation while a run was in progress."""
