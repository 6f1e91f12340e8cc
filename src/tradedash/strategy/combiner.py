"""Consensus over per-strategy signals."""

from __future__ import annotations

from typing import Mapping, Optional

from tradedash.strategy.models import CombinedSignal, CombinerConfig, IndicatorSignal, SignalDirection

_DEFAULT_CONFIG = CombinerConfig()


def combine_signals(
    signals: Mapping[str, IndicatorSignal],
    config: Optional[CombinerConfig] = None,
) -> CombinedSignal:
    """Merge named signals into one decision.

    Each side's vote is the weighted sum of its strengths. The larger vote wins
    and is normalised by the total weight of all participants, neutral ones
    included, then capped at 100. Equal votes, including two empty sides,
    resolve to neutral with zero strength.
    """
    config = config or _DEFAULT_CONFIG
    buy_vote = 0.0
    sell_vote = 0.0
    total_weight = 0.0
    for name, signal in signals.items():
        weight = config.weight_for(name)
        if signal.signal == SignalDirection.BUY:
            buy_vote += signal.strength * weight
        elif signal.signal == SignalDirection.SELL:
            sell_vote += signal.strength * weight
        total_weight += weight

    if total_weight > 0:
        buy_strength = min(100.0, buy_vote / total_weight)
        sell_strength = min(100.0, sell_vote / total_weight)
    else:
        buy_strength = sell_strength = 0.0

    if buy_vote > sell_vote:
        direction, strength = SignalDirection.BUY, buy_strength
    elif sell_vote > buy_vote:
        direction, strength = SignalDirection.SELL, sell_strength
    else:
        direction, strength = SignalDirection.NEUTRAL, 0.0

    if direction != SignalDirection.NEUTRAL and (strength <= 0 or strength < config.min_strength):
        direction, strength = SignalDirection.NEUTRAL, 0.0
    return CombinedSignal(direction, strength, buy_strength, sell_strength)


def strongest_strategy(signals: Mapping[str, IndicatorSignal], direction: SignalDirection) -> str:
    """Name of the strongest strategy voting ``direction``; earliest wins ties."""
    best_name = ""
    best_strength = 0.0
    for name, signal in signals.items():
        if signal.signal == direction and signal.strength > best_strength:
            best_name = name
            best_strength = signal.strength
    return best_name
