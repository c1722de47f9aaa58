"""Monitoring and alert routing."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from cppi_sim.monitoring.notifier import Notifier


@dataclass
class Monitor:
    notifier: Notifier

    def floor_breach(self, tick: int, portfolio_value: Decimal, floor: Decimal) -> None:
        self.notifier.notify(
            "FLOOR",
            f"portfolio {portfolio_value} at or below floor {floor} on tick {tick}, exiting position",
        )

    def price_load_failure(self, reason: str) -> None:
        self.notifier.notify("PRICE_LOAD", reason)

    def run_complete(self, final_value: Decimal, return_percent: Decimal) -> None:
        self.notifier.notify("COMPLETE", f"final {final_value}, return {return_percent}%")
