"""Price data sources."""

from cppi_sim.data.prices import (
    CsvPriceSource,
    MalformedPriceDataError,
    PriceSourceNotFoundError,
    load_prices,
)

__all__ = [
    "CsvPriceSource",
    "MalformedPriceDataError",
    "PriceSourceNotFoundError",
    "load_prices",
]
