"""Simulation data structures."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from tradedash.errors import InvalidConfigurationError

DEFAULT_STOP_LOSS_PERCENT = 2.0
DEFAULT_TAKE_PROFIT_PERCENT = 4.0


class PositionSide(str, Enum):
    LONG = "long"
    SHORT = "short"


class ExitReason(str, Enum):
    SIGNAL = "signal"
    STOP_LOSS = "stop_loss"
    TAKE_PROFIT = "take_profit"


@dataclass(frozen=True)
class Trade:
    symbol: str
    timeframe: str
    entry_time: int
    exit_time: int
    entry_price: float
    exit_price: float
    side: PositionSide
    size: float
    profit_loss: float
    profit_loss_percent: float
    strategy: str
    signal_strength: float
    exit_reason: ExitReason


@dataclass(frozen=True)
class BacktestOptions:
    """Run configuration.

    ``risk_per_trade`` is a percentage of the current balance committed to each
    entry. ``strategies`` of ``None`` enables every registered strategy.
    """

    initial_balance: float
    risk_per_trade: float
    symbols: Sequence[str]
    timeframes: Sequence[str]
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    strategies: Optional[Sequence[str]] = None
    use_stop_loss: bool = False
    stop_loss_percent: float = DEFAULT_STOP_LOSS_PERCENT
    use_take_profit: bool = False
    take_profit_percent: float = DEFAULT_TAKE_PROFIT_PERCENT

    def __post_init__(self) -> None:
        object.__setattr__(self, "symbols", _names(self.symbols, "symbols"))
        object.__setattr__(self, "timeframes", _names(self.timeframes, "timeframes"))
        if self.strategies is not None:
            object.__setattr__(self, "strategies", _names(self.strategies, "strategies"))

        if not _positive(self.initial_balance):
            raise InvalidConfigurationError(
                f"initial_balance must be a positive number, got {self.initial_balance!r}"
            )
        if not _positive(self.risk_per_trade):
            raise InvalidConfigurationError(
                f"risk_per_trade must be a positive percentage, got {self.risk_per_trade!r}"
            )
        if not self.symbols:
            raise InvalidConfigurationError("symbols must not be empty")
        if not self.timeframes:
            raise InvalidConfigurationError("timeframes must not be empty")
        if self.strategies is not None and not self.strategies:
            raise InvalidConfigurationError("strategies must be omitted or non-empty")
        if (
            self.start_time is not None
            and self.end_time is not None
            and self.end_time < self.start_time
        ):
            raise InvalidConfigurationError(
                f"end_time {self.end_time} precedes start_time {self.start_time}"
            )
        if self.use_stop_loss and not _positive(self.stop_loss_percent):
            raise InvalidConfigurationError(
                f"stop_loss_percent must be positive, got {self.stop_loss_percent!r}"
            )
        if self.use_take_profit and not _positive(self.take_profit_percent):
            raise InvalidConfigurationError(
                f"take_profit_percent must be positive, got {self.take_profit_percent!r}"
            )


@dataclass(frozen=True)
class BacktestStats:
    starting_balance: float
    ending_balance: float
    total_profit: float
    profit_percent: float
    num_trades: int
    winning_trades: int
    losing_trades: int
    win_rate: float
    average_profit: float
    average_loss: float
    profit_factor: float
    max_drawdown: float
    max_drawdown_percent: float
    sharpe_ratio: float
    risk_reward_ratio: float
    sortino_ratio: float
    calmar_ratio: float


@dataclass(frozen=True)
class PerformanceBreakdown:
    """Trade outcomes grouped under one strategy or timeframe."""

    name: str
    trades: int
    win_rate: float
    profit_factor: float
    total_profit: float


@dataclass(frozen=True)
class SkippedSeries:
    symbol: str
    timeframe: str
    reason: str


@dataclass(frozen=True)
class BacktestResult:
    trades: list[Trade]
    stats: BacktestStats
    equity_curve: list[float]
    drawdowns: list[float]
    best_trade: Optional[Trade]
    worst_trade: Optional[Trade]
    skipped_series: list[SkippedSeries] = field(default_factory=list)


def _positive(value: float) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value) and value > 0


def _names(values: Sequence[str], label: str) -> tuple[str, ...]:
    if isinstance(values, (str, bytes)):
        raise InvalidConfigurationError(f"{label} must be a list of names, got the string {values!r}")
    names = tuple(values)
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise InvalidConfigurationError(f"{label} contains duplicates: {', '.join(duplicates)}")
    return names
