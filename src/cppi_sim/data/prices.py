"""Historical price loading from CSV exports."""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Union

# Yahoo! Finance daily history: Date,Open,High,Low,Close,Adj Close,Volume
DEFAULT_CLOSE_COLUMN = "Close"
DEFAULT_HEADER_ROWS = 1


class PriceSourceNotFoundError(FileNotFoundError):
    """The price file does not exist."""


class MalformedPriceDataError(ValueError):
    """The price file exists but a row cannot be turned into a price."""


@dataclass(frozen=True)
class CsvPriceSource:
    path: Path
    column: Union[str, int] = DEFAULT_CLOSE_COLUMN
    header_rows: int = DEFAULT_HEADER_ROWS
    delimiter: str = ","

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", Path(self.path))

    def load(self) -> list[Decimal]:
        if not self.path.is_file():
            raise PriceSourceNotFoundError(f"Price source not found: {self.path}")

        raw = self.path.read_bytes()
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            line = raw.count(b"\n", 0, exc.start) + 1
            raise MalformedPriceDataError(f"{self.path}:{line}: not valid UTF-8 ({exc.reason})") from exc

        reader = csv.reader(io.StringIO(text, newline=""), delimiter=self.delimiter)
        try:
            return self._read(reader)
        except csv.Error as exc:
            raise MalformedPriceDataError(f"{self.path}:{reader.line_num}: {exc}") from exc

    def _read(self, reader) -> list[Decimal]:
        header: list[str] = []
        for _ in range(self.header_rows):
            header = next(reader, [])
        index = self._column_index(header)
        prices: list[Decimal] = []
        for row in reader:
            if not any(cell.strip() for cell in row):
                continue
            prices.append(self._parse_cell(row, index, reader.line_num))
        return prices

    def _column_index(self, header: list[str]) -> int:
        if isinstance(self.column, int):
            return self.column
        names = [cell.strip() for cell in header]
        if self.column not in names:
            raise MalformedPriceDataError(
                f"{self.path}: column {self.column!r} not found in header {names}"
            )
        return names.index(self.column)

    def _parse_cell(self, row: list[str], index: int, line: int) -> Decimal:
        if index >= len(row):
            raise MalformedPriceDataError(
                f"{self.path}:{line}: expected at least {index + 1} columns, got {len(row)}"
            )
        raw = row[index].strip()
        try:
            price = Decimal(raw)
        except InvalidOperation as exc:
            raise MalformedPriceDataError(f"{self.path}:{line}: invalid price {raw!r}") from exc
        if not price.is_finite() or price <= 0:
            raise MalformedPriceDataError(f"{self.path}:{line}: price must be positive, got {raw!r}")
        return price


def load_prices(
    path: str | Path,
    column: Union[str, int] = DEFAULT_CLOSE_COLUMN,
    header_rows: int = DEFAULT_HEADER_ROWS,
    delimiter: str = ",",
) -> list[Decimal]:
    return CsvPriceSource(path, column=column, header_rows=header_rows, delimiter=delimiter).load()
