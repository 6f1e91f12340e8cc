"""Configuration models for reproducible backtest runs."""

from __future__ import annotations

from dataclasses import dataclass, field

from tradedash.simulator.models import BacktestOptions
from tradedash.strategy.models import CombinerConfig


@dataclass(frozen=True)
class MonitoringConfig:
    audit_log_path: str = "runtime/backtest_audit.log"


@dataclass(frozen=True)
class BacktestConfig:
    name: str
    version: str
    backtest: BacktestOptions
    combiner: CombinerConfig = field(default_factory=CombinerConfig)
    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)
