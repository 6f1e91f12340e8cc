"""Indicator signals, the strategy registry and the signal combiner."""

from tradedash.strategy.combiner import combine_signals, strongest_strategy
from tradedash.strategy.market_data import Candle
from tradedash.strategy.models import (
    COMBINER_PRESETS,
    TUNED_WEIGHTS,
    CombinedSignal,
    CombinerConfig,
    IndicatorSignal,
    SignalDirection,
)
from tradedash.strategy.registry import DEFAULT_STRATEGIES, IndicatorFn, resolve_strategies

__all__ = [
    "COMBINER_PRESETS",
    "Candle",
    "CombinedSignal",
    "CombinerConfig",
    "DEFAULT_STRATEGIES",
    "IndicatorFn",
    "IndicatorSignal",
    "SignalDirection",
    "TUNED_WEIGHTS",
    "combine_signals",
    "resolve_strategies",
    "strongest_strategy",
]
