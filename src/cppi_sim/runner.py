"""Wire config, prices, simulator and monitoring into one run."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional, Sequence

from cppi_sim.config import SimulationConfig, load_config
from cppi_sim.data import MalformedPriceDataError, PriceSourceNotFoundError
from cppi_sim.monitoring import AuditLog, LogNotifier, Monitor
from cppi_sim.runtime import RunContext, create_run_context
from cppi_sim.simulator import CPPISimulator, SimulationResult


@dataclass(frozen=True)
class RunOutcome:
    context: RunContext
    config: SimulationConfig
    result: SimulationResult


def run_simulation(
    config: SimulationConfig,
    prices: Sequence[Any],
    context: Optional[RunContext] = None,
    monitor: Optional[Monitor] = None,
    audit: Optional[AuditLog] = None,
) -> RunOutcome:
    if context is None:
        context = create_run_context(None, config.run_id_prefix)
    params = config.parameters

    if audit is not None:
        audit.log(
            "run_start",
            {
                "name": config.name,
                "version": config.version,
                "initial_portfolio": params.initial_portfolio,
                "floor": params.floor,
                "max_loss_fraction": params.max_loss_fraction,
                "annual_interest_rate": params.annual_interest_rate,
                "price_count": len(prices),
            },
        )

    result = CPPISimulator(params).simulate(prices)

    if result.terminated_early:
        if monitor is not None:
            monitor.floor_breach(result.breach_tick, result.final_portfolio_value, params.floor)
        if audit is not None:
            audit.log(
                "floor_breach",
                {"tick": result.breach_tick, "portfolio_value": result.final_portfolio_value},
            )
    if monitor is not None:
        monitor.run_complete(result.final_portfolio_value, result.total_return_percent)
    if audit is not None:
        audit.log(
            "run_complete",
            {
                "ticks": result.tick_count,
                "exit_reason": result.exit_reason.value,
                "final_portfolio_value": result.final_portfolio_value,
                "total_return_percent": result.total_return_percent,
            },
        )
    return RunOutcome(context=context, config=config, result=result)


def load_price_series(
    config: SimulationConfig,
    monitor: Optional[Monitor] = None,
    audit: Optional[AuditLog] = None,
) -> list[Decimal]:
    """Load the configured prices, reporting a failure before re-raising it."""
    try:
        prices = config.prices.source().load()
    except (PriceSourceNotFoundError, MalformedPriceDataError) as exc:
        if monitor is not None:
            monitor.price_load_failure(str(exc))
        if audit is not None:
            audit.log("run_failed", {"error": type(exc).__name__, "message": str(exc)})
        raise
    if audit is not None:
        audit.log("prices_loaded", {"path": str(config.prices.path), "count": len(prices)})
    return prices


def run_config(
    config: SimulationConfig,
    config_path: str | Path | None = None,
    monitor: Optional[Monitor] = None,
    run_id: Optional[str] = None,
) -> RunOutcome:
    context = create_run_context(config_path, config.run_id_prefix, run_id=run_id)
    if monitor is None:
        monitor = Monitor(LogNotifier())
    audit = AuditLog(
        Path(config.monitoring.audit_log_path),
        run_id=context.run_id,
        config_hash=context.config_hash,
    )
    prices = load_price_series(config, monitor=monitor, audit=audit)
    return run_simulation(config, prices, context=context, monitor=monitor, audit=audit)


def run_from_config(
    path: str | Path,
    monitor: Optional[Monitor] = None,
    run_id: Optional[str] = None,
) -> RunOutcome:
    return run_config(load_config(path), config_path=path, monitor=monitor, run_id=run_id)
