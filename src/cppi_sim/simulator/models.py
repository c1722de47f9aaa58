"""Simulation data structures."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


def to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps the shortest repr of floats, so 0.2 becomes Decimal("0.2")
    return Decimal(str(value))


class ExitReason(str, Enum):
    FLOOR_BREACHED = "floor_breached"
    PRICES_EXHAUSTED = "prices_exhausted"


@dataclass(frozen=True)
class SimulationParameters:
    initial_portfolio: Decimal
    floor: Decimal
    max_loss_fraction: Decimal
    annual_interest_rate: Decimal

    def __post_init__(self) -> None:
        for name in ("initial_portfolio", "floor", "max_loss_fraction", "annual_interest_rate"):
            object.__setattr__(self, name, to_decimal(getattr(self, name)))

    @property
    def multiplier(self) -> Decimal:
        """Leverage applied to the cushion; infinite when no loss is expected."""
        if self.max_loss_fraction == 0:
            return Decimal("Infinity")
        return Decimal(1) / self.max_loss_fraction

    def cushion(self, portfolio_value: Decimal) -> Decimal:
        return portfolio_value - self.floor


@dataclass(frozen=True)
class TickRecord:
    tick: int
    price: Decimal
    next_price: Decimal
    risky_units: int
    risky_value: Decimal
    safe_value: Decimal
    portfolio_value: Decimal


@dataclass(frozen=True)
class SimulationResult:
    initial_portfolio: Decimal
    ticks: tuple[TickRecord, ...]
    exit_reason: ExitReason
    breach_tick: Optional[int]
    final_portfolio_value: Decimal
    total_return_percent: Decimal

    @property
    def portfolio_values(self) -> tuple[Decimal, ...]:
        return tuple(record.portfolio_value for record in self.ticks)

    @property
    def terminated_early(self) -> bool:
        return self.exit_reason == ExitReason.FLOOR_BREACHED

    @property
    def tick_count(self) -> int:
        return len(self.ticks)
