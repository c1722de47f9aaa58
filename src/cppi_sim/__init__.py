"""Constant Proportion Portfolio Insurance backtesting."""

from cppi_sim.simulator import CPPISimulator, SimulationParameters, SimulationResult, simulate

__version__ = "0.1.0"

__all__ = [
    "CPPISimulator",
    "SimulationParameters",
    "SimulationResult",
    "simulate",
]
