"""JSON-serialisable run reports."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from cppi_sim.config.loader import serialize_config
from cppi_sim.config.models import SimulationConfig
from cppi_sim.runtime.context import RunContext
from cppi_sim.simulator.models import SimulationResult, TickRecord


def _serialize_tick(record: TickRecord) -> dict[str, Any]:
    return {
        "tick": record.tick,
        "price": str(record.price),
        "next_price": str(record.next_price),
        "risky_units": record.risky_units,
        "risky_value": str(record.risky_value),
        "safe_value": str(record.safe_value),
        "portfolio_value": str(record.portfolio_value),
    }


def build_report(
    result: SimulationResult,
    context: RunContext,
    config: Optional[SimulationConfig] = None,
) -> dict[str, Any]:
    # Decimals are written as strings so the cents survive a JSON round trip.
    return {
        "generated_at_utc": datetime.now(timezone.utc).isoformat(),
        "run_id": context.run_id,
        "config_path": str(context.config_path) if context.config_path else None,
        "config_hash": context.config_hash,
        "config": serialize_config(config) if config is not None else None,
        "summary": {
            "initial_portfolio": str(result.initial_portfolio),
            "final_portfolio_value": str(result.final_portfolio_value),
            "total_return_percent": str(result.total_return_percent),
            "exit_reason": result.exit_reason.value,
            "terminated_early": result.terminated_early,
            "breach_tick": result.breach_tick,
            "ticks": result.tick_count,
        },
        "ticks": [_serialize_tick(record) for record in result.ticks],
    }
