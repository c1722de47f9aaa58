"""Console output for finished simulations."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TextIO

from cppi_sim.simulator.models import SimulationResult

FLOOR_MESSAGE = "Floor reached, exiting position"


def format_report(result: SimulationResult, show_ticks: bool = True) -> list[str]:
    lines: list[str] = []
    if show_ticks:
        lines.extend(str(value) for value in result.portfolio_values)
    if result.terminated_early:
        lines.append(FLOOR_MESSAGE)
    lines.append(f"Portfolio: ${result.final_portfolio_value}")
    lines.append(f"Return: {result.total_return_percent}%")
    return lines


@dataclass
class Reporter:
    stream: TextIO = field(default_factory=lambda: sys.stdout)
    show_ticks: bool = True

    def emit(self, result: SimulationResult) -> None:
        for line in format_report(result, show_ticks=self.show_ticks):
            self.stream.write(line)
            self.stream.write("\n")
        self.stream.flush()
