"""Strategy signal combination and candle-replay backtesting."""

__version__ = "0.1.0"
