"""Runtime helpers."""

from cppi_sim.runtime.context import RunContext, create_run_context

__all__ = ["RunContext", "create_run_context"]
