"""Load backtest configuration files."""

from __future__ import annotations

import hashlib
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import yaml

from tradedash.config.models import BacktestConfig, MonitoringConfig
from tradedash.errors import InvalidConfigurationError
from tradedash.simulator.models import (
    DEFAULT_STOP_LOSS_PERCENT,
    DEFAULT_TAKE_PROFIT_PERCENT,
    BacktestOptions,
)
from tradedash.strategy.models import COMBINER_PRESETS, CombinerConfig
from tradedash.strategy.registry import resolve_strategies


def load_config(path: str | Path) -> BacktestConfig:
    path = Path(path)
    data = _load_yaml(path)

    name = str(_require(data, "name"))
    version = str(_require(data, "version"))
    backtest = _parse_backtest(_require(data, "backtest"))
    combiner = _parse_combiner(data.get("combiner") or {})
    monitoring = _parse_monitoring(data.get("monitoring") or {})

    return BacktestConfig(
        name=name,
        version=version,
        backtest=backtest,
        combiner=combiner,
        monitoring=monitoring,
    )


def compute_config_hash(path: str | Path) -> str:
    path = Path(path)
    content = path.read_bytes()
    return hashlib.sha256(content).hexdigest()


def make_run_id(config: BacktestConfig, config_hash: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    stamp = now.strftime("%Y%m%dT%H%M%SZ")
    return f"{config.name}-{stamp}-{config_hash[:8]}"


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise InvalidConfigurationError(f"{path}: invalid YAML") from exc
    if not isinstance(data, dict):
        raise InvalidConfigurationError("Config must be a mapping")
    return data


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise InvalidConfigurationError(f"Missing required config key: {key}")
    return data[key]


def _as_float(value: Any, key: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidConfigurationError(f"Invalid {key}: {value!r}") from exc


def _as_list(value: Any, key: str) -> list[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)):
        raise InvalidConfigurationError(f"{key} must be a list")
    return [str(item) for item in value]


def _parse_time(value: Any, key: str) -> Optional[int]:
    """Epoch milliseconds from an int or an ISO-8601 timestamp (UTC if naive)."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidConfigurationError(f"Invalid {key}: {value!r}")
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as exc:
            raise InvalidConfigurationError(f"Invalid {key}: {value!r}") from exc
    elif isinstance(value, datetime):
        parsed = value
    else:
        raise InvalidConfigurationError(f"Invalid {key}: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)


def _parse_toggle(data: Any, key: str, default_percent: float) -> tuple[bool, float]:
    if data is None:
        return False, default_percent
    if not isinstance(data, dict):
        raise InvalidConfigurationError(f"{key} must be a mapping")
    enabled = bool(data.get("enabled", False))
    percent = _as_float(data.get("percent", default_percent), f"{key}.percent")
    return enabled, percent


def _parse_backtest(data: Any) -> BacktestOptions:
    if not isinstance(data, dict):
        raise InvalidConfigurationError("backtest must be a mapping")
    strategies = data.get("strategies")
    if strategies is not None:
        strategies = _as_list(strategies, "backtest.strategies")
        resolve_strategies(strategies)
    use_stop_loss, stop_loss_percent = _parse_toggle(
        data.get("stop_loss"), "stop_loss", DEFAULT_STOP_LOSS_PERCENT
    )
    use_take_profit, take_profit_percent = _parse_toggle(
        data.get("take_profit"), "take_profit", DEFAULT_TAKE_PROFIT_PERCENT
    )
    return BacktestOptions(
        initial_balance=_as_float(_require(data, "initial_balance"), "initial_balance"),
        risk_per_trade=_as_float(_require(data, "risk_per_trade"), "risk_per_trade"),
        symbols=_as_list(_require(data, "symbols"), "symbols"),
        timeframes=_as_list(_require(data, "timeframes"), "timeframes"),
        start_time=_parse_time(data.get("start_time"), "start_time"),
        end_time=_parse_time(data.get("end_time"), "end_time"),
        strategies=strategies,
        use_stop_loss=use_stop_loss,
        stop_loss_percent=stop_loss_percent,
        use_take_profit=use_take_profit,
        take_profit_percent=take_profit_percent,
    )


def _parse_combiner(data: dict[str, Any]) -> CombinerConfig:
    preset_name = str(data.get("preset", "equal"))
    if preset_name not in COMBINER_PRESETS:
        raise InvalidConfigurationError(
            f"Unknown combiner preset {preset_name!r}. Available: {', '.join(COMBINER_PRESETS)}"
        )
    base = COMBINER_PRESETS[preset_name]()
    weights = data.get("weights") or {}
    if not isinstance(weights, dict):
        raise InvalidConfigurationError("combiner.weights must be a mapping")
    # explicit keys override the preset
    merged = dict(base.weights)
    merged.update({str(name): _as_float(value, f"weight {name}") for name, value in weights.items()})
    return CombinerConfig(
        weights=merged,
        default_weight=_as_float(data.get("default_weight", base.default_weight), "default_weight"),
        min_strength=_as_float(data.get("min_strength", base.min_strength), "min_strength"),
    )


def _parse_monitoring(data: dict[str, Any]) -> MonitoringConfig:
    return MonitoringConfig(
        audit_log_path=str(data.get("audit_log_path", "runtime/backtest_audit.log")),
    )


def serialize_config(config: BacktestConfig) -> dict[str, Any]:
    payload = asdict(config)
    payload["backtest"]["symbols"] = list(config.backtest.symbols)
    payload["backtest"]["timeframes"] = list(config.backtest.timeframes)
    if config.backtest.strategies is not None:
        payload["backtest"]["strategies"] = list(config.backtest.strategies)
    return payload
