"""Command line entry point for one CPPI backtest."""

from __future__ import annotations

import argparse
import json
import sys
from decimal import InvalidOperation
from pathlib import Path
from typing import Optional, Sequence

from cppi_sim.config import DEFAULT_PARAMETERS, MonitoringConfig, PriceConfig, SimulationConfig, load_config
from cppi_sim.data import MalformedPriceDataError, PriceSourceNotFoundError
from cppi_sim.monitoring import LogNotifier, Monitor
from cppi_sim.reporting import Reporter, build_report
from cppi_sim.runner import run_config
from cppi_sim.simulator import SimulationParameters

EXIT_OK = 0
EXIT_SOURCE_MISSING = 2
EXIT_MALFORMED = 3
EXIT_BAD_CONFIG = 4


def _column(value: str) -> str | int:
    return int(value) if value.isdigit() else value


def _parameter(value: Optional[str], default):
    return value if value is not None else default


def _adhoc_config(args: argparse.Namespace) -> SimulationConfig:
    try:
        params = SimulationParameters(
            initial_portfolio=_parameter(args.initial_portfolio, DEFAULT_PARAMETERS.initial_portfolio),
            floor=_parameter(args.floor, DEFAULT_PARAMETERS.floor),
            max_loss_fraction=_parameter(args.max_loss, DEFAULT_PARAMETERS.max_loss_fraction),
            annual_interest_rate=_parameter(args.interest, DEFAULT_PARAMETERS.annual_interest_rate),
        )
    except InvalidOperation as exc:
        raise ValueError("parameters must be numbers") from exc
    return SimulationConfig(
        name="adhoc",
        version="0",
        run_id_prefix="cppi",
        parameters=params,
        prices=PriceConfig(path=Path(args.prices), column=args.column, header_rows=args.header_rows),
        monitoring=MonitoringConfig(audit_log_path=args.audit_log),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Simulate CPPI over a daily price history")
    parser.add_argument("--config", help="YAML config; overrides the ad-hoc flags below")
    parser.add_argument("--prices", default="^GSPC.csv", help="CSV with daily prices (Yahoo! Finance layout)")
    parser.add_argument("--column", type=_column, default="Close", help="Header name or zero-based offset")
    parser.add_argument("--header-rows", type=int, default=1)
    parser.add_argument("--initial-portfolio")
    parser.add_argument("--floor")
    parser.add_argument("--max-loss")
    parser.add_argument("--interest")
    parser.add_argument("--audit-log", default=MonitoringConfig.audit_log_path)
    parser.add_argument("--quiet", action="store_true", help="Only print the summary lines")
    parser.add_argument("--output", help="Write a JSON report here")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    monitor = Monitor(LogNotifier())

    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path) if config_path else _adhoc_config(args)
    except FileNotFoundError:
        print(f"error: config not found: {config_path}", file=sys.stderr)
        return EXIT_BAD_CONFIG
    except ValueError as exc:
        print(f"error: invalid config: {exc}", file=sys.stderr)
        return EXIT_BAD_CONFIG

    try:
        outcome = run_config(config, config_path=config_path, monitor=monitor)
    except PriceSourceNotFoundError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_SOURCE_MISSING
    except MalformedPriceDataError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_MALFORMED

    show_ticks = outcome.config.report.show_ticks and not args.quiet
    Reporter(sys.stdout, show_ticks=show_ticks).emit(outcome.result)

    output = args.output or outcome.config.report.output_path
    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        report = build_report(outcome.result, outcome.context, outcome.config)
        output_path.write_text(json.dumps(report, indent=2, default=str), encoding="utf-8")
        print(f"Wrote {output_path}", file=sys.stderr)
    return EXIT_OK
