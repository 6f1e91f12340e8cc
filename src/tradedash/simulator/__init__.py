"""Backtest simulation, statistics and reporting."""

from tradedash.simulator.candles import (
    CandleBook,
    filter_time_range,
    load_candles,
    load_candles_csv,
    load_candles_json,
    validate_series,
)
from tradedash.simulator.engine import (
    WARMUP_CANDLES,
    BacktestEngine,
    build_result,
    equity_and_drawdowns,
    run_backtest,
)
from tradedash.simulator.models import (
    BacktestOptions,
    BacktestResult,
    BacktestStats,
    ExitReason,
    PerformanceBreakdown,
    PositionSide,
    SkippedSeries,
    Trade,
)
from tradedash.simulator.report import (
    best_performing_strategy,
    format_backtest_report,
    serialize_result,
    strategy_breakdown,
    timeframe_breakdown,
)
from tradedash.simulator.stats import (
    calculate_backtest_stats,
    calmar_ratio,
    empty_stats,
    sharpe_ratio,
    sortino_ratio,
)

__all__ = [
    "BacktestEngine",
    "BacktestOptions",
    "BacktestResult",
    "BacktestStats",
    "CandleBook",
    "ExitReason",
    "PerformanceBreakdown",
    "PositionSide",
    "SkippedSeries",
    "Trade",
    "WARMUP_CANDLES",
    "best_performing_strategy",
    "build_result",
    "calculate_backtest_stats",
    "calmar_ratio",
    "empty_stats",
    "equity_and_drawdowns",
    "filter_time_range",
    "format_backtest_report",
    "load_candles",
    "load_candles_csv",
    "load_candles_json",
    "run_backtest",
    "serialize_result",
    "sharpe_ratio",
    "sortino_ratio",
    "strategy_breakdown",
    "timeframe_breakdown",
    "validate_series",
]
