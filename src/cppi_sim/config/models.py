"""Configuration models for reproducible runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from cppi_sim.data.prices import DEFAULT_CLOSE_COLUMN, DEFAULT_HEADER_ROWS, CsvPriceSource
from cppi_sim.simulator.models import SimulationParameters


DEFAULT_PARAMETERS = SimulationParameters(
    initial_portfolio=100000,
    floor=80000,
    max_loss_fraction="0.2",
    annual_interest_rate="0.02",
)


@dataclass(frozen=True)
class PriceConfig:
    path: Path = Path("^GSPC.csv")
    column: Union[str, int] = DEFAULT_CLOSE_COLUMN
    header_rows: int = DEFAULT_HEADER_ROWS
    delimiter: str = ","

    def source(self) -> CsvPriceSource:
        return CsvPriceSource(
            self.path,
            column=self.column,
            header_rows=self.header_rows,
            delimiter=self.delimiter,
        )


@dataclass(frozen=True)
class MonitoringConfig:
    audit_log_path: str = "runtime/audit.log"


@dataclass(frozen=True)
class ReportConfig:
    show_ticks: bool = True
    output_path: str | None = None


@dataclass(frozen=True)
class SimulationConfig:
    name: str
    version: str
    run_id_prefix: str
    parameters: SimulationParameters = DEFAULT_PARAMETERS
    prices: PriceConfig = field(default_factory=PriceConfig)
    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
