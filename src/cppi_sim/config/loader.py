"""Load simulation configuration files."""

from __future__ import annotations

import hashlib
from dataclasses import asdict
from decimal import InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from cppi_sim.config.models import (
    DEFAULT_PARAMETERS,
    MonitoringConfig,
    PriceConfig,
    ReportConfig,
    SimulationConfig,
)
from cppi_sim.simulator.models import SimulationParameters


def load_config(path: str | Path) -> SimulationConfig:
    path = Path(path)
    data = _load_yaml(path)

    name = _require(data, "name")
    version = str(_require(data, "version"))
    run_id_prefix = data.get("run_id_prefix", name)

    parameters = _parse_parameters(_require(data, "parameters"))
    prices = _parse_prices(_require(data, "prices"), base_dir=path.parent)
    monitoring = _parse_monitoring(data.get("monitoring", {}))
    report = _parse_report(data.get("report", {}))

    return SimulationConfig(
        name=name,
        version=version,
        run_id_prefix=run_id_prefix,
        parameters=parameters,
        prices=prices,
        monitoring=monitoring,
        report=report,
    )


def compute_config_hash(path: str | Path) -> str:
    path = Path(path)
    content = path.read_bytes()
    return hashlib.sha256(content).hexdigest()


def serialize_config(config: SimulationConfig) -> dict[str, Any]:
    payload = asdict(config)
    payload["parameters"] = {key: str(value) for key, value in payload["parameters"].items()}
    payload["prices"]["path"] = str(config.prices.path)
    return payload


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("Config must be a mapping")
    return data


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"Missing required config key: {key}")
    return data[key]


def _mapping(data: Any, key: str) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{key} must be a mapping")
    return data


def _parse_parameters(data: Any) -> SimulationParameters:
    data = _mapping(data, "parameters")
    defaults = DEFAULT_PARAMETERS
    try:
        return SimulationParameters(
            initial_portfolio=data.get("initial_portfolio", defaults.initial_portfolio),
            floor=data.get("floor", defaults.floor),
            max_loss_fraction=data.get("max_loss_fraction", defaults.max_loss_fraction),
            annual_interest_rate=data.get("annual_interest_rate", defaults.annual_interest_rate),
        )
    except InvalidOperation as exc:
        raise ValueError(f"Invalid numeric value in parameters: {data}") from exc


def _parse_prices(data: Any, base_dir: Path) -> PriceConfig:
    data = _mapping(data, "prices")
    path = Path(str(_require(data, "path")))
    if not path.is_absolute():
        path = base_dir / path
    column = data.get("column", PriceConfig.column)
    if not isinstance(column, (str, int)):
        raise ValueError(f"Invalid prices.column: {column}")
    return PriceConfig(
        path=path,
        column=column,
        header_rows=int(data.get("header_rows", PriceConfig.header_rows)),
        delimiter=str(data.get("delimiter", PriceConfig.delimiter)),
    )


def _parse_monitoring(data: Any) -> MonitoringConfig:
    data = _mapping(data, "monitoring")
    return MonitoringConfig(
        audit_log_path=str(data.get("audit_log_path", MonitoringConfig.audit_log_path)),
    )


def _parse_report(data: Any) -> ReportConfig:
    data = _mapping(data, "report")
    output_path = data.get("output_path")
    return ReportConfig(
        show_ticks=bool(data.get("show_ticks", True)),
        output_path=str(output_path) if output_path is not None else None,
    )
