"""Simulation helpers."""

from cppi_sim.simulator.engine import CPPISimulator, simulate, truncate_cents, whole_units
from cppi_sim.simulator.models import (
    ExitReason,
    SimulationParameters,
    SimulationResult,
    TickRecord,
)

__all__ = [
    "CPPISimulator",
    "ExitReason",
    "SimulationParameters",
    "SimulationResult",
    "TickRecord",
    "simulate",
    "truncate_cents",
    "whole_units",
]
