"""CPPI rebalancing simulator."""

from __future__ import annotations

from decimal import (
    ROUND_FLOOR,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    getcontext,
    localcontext,
)
from typing import Any, Iterator, Optional, Sequence

from cppi_sim.simulator.models import (
    ExitReason,
    SimulationParameters,
    SimulationResult,
    TickRecord,
    to_decimal,
)

CENT = Decimal("0.01")
DAYS_PER_YEAR = Decimal(365)
WORKING_PRECISION = 60

# Unit counts saturate at the signed 64-bit range, like a cast to long.
MAX_UNITS = 2**63 - 1
MIN_UNITS = -(2**63)


def _lenient_context():
    # x/0 gives Infinity, 0*Infinity gives NaN and overflow gives Infinity
    # instead of raising.
    ctx = getcontext().copy()
    ctx.prec = max(ctx.prec, WORKING_PRECISION)
    ctx.traps[DivisionByZero] = False
    ctx.traps[InvalidOperation] = False
    ctx.traps[Overflow] = False
    return localcontext(ctx)


def truncate_cents(value: Decimal) -> Decimal:
    """Round down to whole cents (floor, not half-up)."""
    if not value.is_finite():
        return value
    if value.adjusted() + 3 > getcontext().prec:
        # Too wide to carry cents at this precision; floor to a whole unit.
        return value.to_integral_value(rounding=ROUND_FLOOR)
    return value.quantize(CENT, rounding=ROUND_FLOOR)


def whole_units(amount: Decimal, price: Decimal) -> int:
    """Number of whole risky units ``amount`` buys at ``price``."""
    with _lenient_context():
        quotient = amount / price
        if quotient.is_nan():
            return 0
        if quotient >= MAX_UNITS:
            return MAX_UNITS
        if quotient <= MIN_UNITS:
            return MIN_UNITS
        return int(quotient.to_integral_value(rounding=ROUND_FLOOR))


class CPPISimulator:
    def __init__(self, params: SimulationParameters) -> None:
        self.params = params

    def iter_ticks(self, prices: Sequence[Any]) -> Iterator[TickRecord]:
        """Yield one record per rebalance, stopping after the floor is hit."""
        series = [to_decimal(price) for price in prices]
        portfolio = self.params.initial_portfolio
        for tick in range(1, len(series)):
            record = self._rebalance(tick, portfolio, series[tick - 1], series[tick])
            portfolio = record.portfolio_value
            yield record
            if self._at_or_below_floor(portfolio):
                return

    def simulate(self, prices: Sequence[Any]) -> SimulationResult:
        ticks = tuple(self.iter_ticks(prices))
        initial = self.params.initial_portfolio
        if not ticks:
            return SimulationResult(
                initial_portfolio=initial,
                ticks=(),
                exit_reason=ExitReason.PRICES_EXHAUSTED,
                breach_tick=None,
                final_portfolio_value=initial,
                total_return_percent=Decimal(0),
            )

        final = ticks[-1].portfolio_value
        breach_tick: Optional[int] = None
        exit_reason = ExitReason.PRICES_EXHAUSTED
        if self._at_or_below_floor(final):
            breach_tick = ticks[-1].tick
            exit_reason = ExitReason.FLOOR_BREACHED

        return SimulationResult(
            initial_portfolio=initial,
            ticks=ticks,
            exit_reason=exit_reason,
            breach_tick=breach_tick,
            final_portfolio_value=final,
            total_return_percent=self._return_percent(final),
        )

    def _rebalance(self, tick: int, portfolio: Decimal, price: Decimal, next_price: Decimal) -> TickRecord:
        params = self.params
        with _lenient_context():
            # Only the upper bound is clamped; a negative cushion sells short.
            allocated = min(params.multiplier * params.cushion(portfolio), portfolio)
            units = whole_units(allocated, price)
            allocated = truncate_cents(units * price)

            remaining = portfolio - allocated
            remaining *= 1 + params.annual_interest_rate / DAYS_PER_YEAR
            remaining = truncate_cents(remaining)

            allocated = truncate_cents(units * next_price)
            portfolio = truncate_cents(allocated + remaining)

        return TickRecord(
            tick=tick,
            price=price,
            next_price=next_price,
            risky_units=units,
            risky_value=allocated,
            safe_value=remaining,
            portfolio_value=portfolio,
        )

    def _at_or_below_floor(self, value: Decimal) -> bool:
        with _lenient_context():
            return value <= self.params.floor

    def _return_percent(self, final: Decimal) -> Decimal:
        with _lenient_context():
            return (final / self.params.initial_portfolio - 1) * 100


def simulate(
    prices: Sequence[Any],
    initial_portfolio: Any,
    floor: Any,
    max_loss_fraction: Any,
    annual_interest_rate: Any,
) -> SimulationResult:
    params = SimulationParameters(
        initial_portfolio=initial_portfolio,
        floor=floor,
        max_loss_fraction=max_loss_fraction,
        annual_interest_rate=annual_interest_rate,
    )
    return CPPISimulator(params).simulate(prices)
