"""Config loading."""

from tradedash.config.loader import compute_config_hash, load_config, make_run_id, serialize_config
from tradedash.config.models import BacktestConfig, MonitoringConfig

__all__ = [
    "BacktestConfig",
    "MonitoringConfig",
    "compute_config_hash",
    "load_config",
    "make_run_id",
    "serialize_config",
]
