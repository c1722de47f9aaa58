"""Reporting exports."""

from cppi_sim.reporting.report import build_report
from cppi_sim.reporting.reporter import FLOOR_MESSAGE, Reporter, format_report

__all__ = [
    "FLOOR_MESSAGE",
    "Reporter",
    "build_report",
    "format_report",
]
