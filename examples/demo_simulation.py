from pathlib import Path

from cppi_sim.data import load_prices
from cppi_sim.reporting import Reporter
from cppi_sim.simulator import CPPISimulator, SimulationParameters


prices = load_prices(Path("data") / "gspc_sample.csv")

params = SimulationParameters(
    initial_portfolio=100000,
    floor=80000,
    max_loss_fraction="0.2",
    annual_interest_rate="0.02",
)
simulator = CPPISimulator(params)

print("Multiplier:", params.multiplier)
for record in simulator.iter_ticks(prices):
    print(
        f"tick {record.tick}: {record.risky_units} units @ {record.price} -> "
        f"risky {record.risky_value} + safe {record.safe_value} = {record.portfolio_value}"
    )

Reporter(show_ticks=False).emit(simulator.simulate(prices))
