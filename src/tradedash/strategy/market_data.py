"""Candle data shared by indicators and the simulator."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Candle:
    time: int  # epoch milliseconds
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0
