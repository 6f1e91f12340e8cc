"""Named strategy registry."""

from __future__ import annotations

from typing import Callable, Mapping, Optional, Sequence

from tradedash.errors import InvalidConfigurationError
from tradedash.strategy import signals
from tradedash.strategy.market_data import Candle
from tradedash.strategy.models import IndicatorSignal

IndicatorFn = Callable[[Sequence[Candle]], IndicatorSignal]

DEFAULT_STRATEGIES: dict[str, IndicatorFn] = {
    "MeanReversion": signals.mean_reversion_signal,
    "EMA Crossover": signals.ema_crossover_signal,
    "RSI Divergence": signals.rsi_divergence_signal,
    "Bollinger Squeeze": signals.bollinger_squeeze_signal,
    "Volume Spike": signals.volume_spike_signal,
    "ADX Trend": signals.adx_trend_signal,
    "Supertrend": signals.supertrend_signal,
    "Heikin Ashi": signals.heikin_ashi_signal,
    "Fibonacci Retracement": signals.fibonacci_retracement_signal,
    "Fractal Breakout": signals.fractal_breakout_signal,
    "CCI": signals.cci_signal,
    "Stochastic": signals.stochastic_signal,
    "Williams %R": signals.williams_r_signal,
    "Parabolic SAR": signals.parabolic_sar_signal,
    "VWAP": signals.vwap_signal,
    "Breakout": signals.breakout_signal,
    "Momentum RSI": signals.momentum_rsi_signal,
}


def resolve_strategies(
    names: Optional[Sequence[str]] = None,
    registry: Optional[Mapping[str, IndicatorFn]] = None,
) -> dict[str, IndicatorFn]:
    """Return the enabled strategies in registry order.

    ``names`` of ``None`` enables the whole registry.
    """
    registry = DEFAULT_STRATEGIES if registry is None else registry
    if names is None:
        return dict(registry)
    unknown = [name for name in names if name not in registry]
    if unknown:
        raise InvalidConfigurationError(
            f"Unknown strategies: {', '.join(unknown)}. Available: {', '.join(registry)}"
        )
    enabled = set(names)
    return {name: fn for name, fn in registry.items() if name in enabled}
