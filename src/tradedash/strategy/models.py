"""Signal and combiner models."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from tradedash.errors import InvalidConfigurationError


TUNED_WEIGHTS: Mapping[str, float] = {
    "MeanReversion": 0.5,
    "EMA Crossover": 0.8,
    "RSI Divergence": 0.9,
    "Bollinger Squeeze": 0.7,
    "Volume Spike": 0.6,
    "ADX Trend": 0.8,
    "Supertrend": 1.0,
    "Heikin Ashi": 0.7,
    "Fibonacci Retracement": 0.8,
    "Fractal Breakout": 0.7,
    "CCI": 0.6,
    "Stochastic": 0.7,
    "Williams %R": 0.6,
    "Parabolic SAR": 0.9,
    "VWAP": 0.8,
    "Breakout": 0.9,
    "Momentum RSI": 0.8,
}
TUNED_DEFAULT_WEIGHT = 0.5
TUNED_MIN_STRENGTH = 30.0


class SignalDirection(str, Enum):
    BUY = "buy"
    SELL = "sell"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class IndicatorSignal:
    signal: SignalDirection
    strength: float = 0.0
    meta: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        strength = float(self.strength)
        if math.isnan(strength):
            strength = 0.0
        object.__setattr__(self, "strength", min(100.0, max(0.0, strength)))

    @classmethod
    def neutral(cls, **meta: Any) -> "IndicatorSignal":
        return cls(SignalDirection.NEUTRAL, 0.0, meta)

    @classmethod
    def buy(cls, strength: float, **meta: Any) -> "IndicatorSignal":
        return cls(SignalDirection.BUY, strength, meta)

    @classmethod
    def sell(cls, strength: float, **meta: Any) -> "IndicatorSignal":
        return cls(SignalDirection.SELL, strength, meta)


@dataclass(frozen=True)
class CombinedSignal:
    signal: SignalDirection
    strength: float
    buy_strength: float = 0.0
    sell_strength: float = 0.0


@dataclass(frozen=True)
class CombinerConfig:
    """Per-strategy vote weights and the minimum winning strength.

    The defaults weight every strategy equally and accept any non-tied vote.
    """

    weights: Mapping[str, float] = field(default_factory=dict)
    default_weight: float = 1.0
    min_strength: float = 0.0

    def __post_init__(self) -> None:
        for name, weight in self.weights.items():
            if not math.isfinite(weight) or weight < 0:
                raise InvalidConfigurationError(f"weight for {name!r} must be >= 0, got {weight!r}")
        if not math.isfinite(self.default_weight) or self.default_weight < 0:
            raise InvalidConfigurationError(
                f"default_weight must be >= 0, got {self.default_weight!r}"
            )
        if not 0.0 <= self.min_strength <= 100.0:
            raise InvalidConfigurationError(
                f"min_strength must be within [0, 100], got {self.min_strength!r}"
            )

    def weight_for(self, strategy: str) -> float:
        return self.weights.get(strategy, self.default_weight)

    @classmethod
    def tuned(cls) -> "CombinerConfig":
        """Trend-leaning weights with a 30-point floor on the winning vote."""
        return cls(
            weights=dict(TUNED_WEIGHTS),
            default_weight=TUNED_DEFAULT_WEIGHT,
            min_strength=TUNED_MIN_STRENGTH,
        )


COMBINER_PRESETS = {
    "equal": CombinerConfig,
    "tuned": CombinerConfig.tuned,
}
