"""Config loading."""

from cppi_sim.config.loader import compute_config_hash, load_config, serialize_config
from cppi_sim.config.models import (
    DEFAULT_PARAMETERS,
    MonitoringConfig,
    PriceConfig,
    ReportConfig,
    SimulationConfig,
)

__all__ = [
    "DEFAULT_PARAMETERS",
    "MonitoringConfig",
    "PriceConfig",
    "ReportConfig",
    "SimulationConfig",
    "compute_config_hash",
    "load_config",
    "serialize_config",
]
