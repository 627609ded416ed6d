"""CLI entry point for the retirement calculator."""

from __future__ import annotations

import argparse
from datetime import datetime
import sys

from .config import ConfigError, load_settings
from .core.inputs import apply_field_values, parse_assignments
from .core.projection import format_currency, project
from .core.summary import summarize
from .utils.logging import setup_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Project savings and expenses until retirement")
    parser.add_argument("--config", help="Path to YAML config (default: config.yaml or $RETIREMENT_CALC_CONFIG)")
    parser.add_argument("--reference-year", type=int, help="Calendar year of the first row (default: this year)")
    parser.add_argument(
        "--set",
        dest="fields",
        action="append",
        default=[],
        metavar="FIELD=VALUE",
        help="Override a profile field, e.g. --set currentAge=40 (repeatable)",
    )
    parser.add_argument("--table", action="store_true", help="Print every projected year")
    parser.add_argument("--serve", action="store_true", help="Run the HTTP API instead of printing a projection")
    parser.add_argument("--host", default="127.0.0.1", help="Host for --serve (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=5000, help="Port for --serve (default: 5000)")
    return parser


def _print_table(rows) -> None:
    print(f"{'Year':>6} {'Age':>4} {'Portfolio':>12} {'Monthly exp.':>13}  Windfall")
    for row in rows:
        print(
            f"{row.year:>6} {row.age:>4} {format_currency(row.portfolio):>12} "
            f"{format_currency(row.totalMonthlyExpenses):>13}  {'yes' if row.receivedWindfall else ''}"
        )


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except (ConfigError, OSError) as exc:
        print(f"Failed to load config: {exc}", file=sys.stderr)
        return 2
    setup_logging(settings.log_level)

    if args.serve:
        from .app import create_app

        create_app(settings).run(host=args.host, port=args.port)
        return 0

    try:
        fields = parse_assignments(args.fields)
    except ValueError as exc:
        print(f"Invalid --set: {exc}", file=sys.stderr)
        return 2

    profile = apply_field_values(settings.default_profile(), fields)
    reference_year = args.reference_year if args.reference_year is not None else datetime.now().year
    result = project(profile, reference_year)
    if not result.ok:
        print(f"ERROR: {result.failure.kind.value}: {result.failure.message}", file=sys.stderr)
        return 1

    if args.table:
        _print_table(result.rows)

    summary = summarize(result.rows, settings.withdrawal_rate)
    first, last = result.rows[0], result.rows[-1]
    print(f"Years: {first.year}-{last.year}")
    print(f"Portfolio value at age {summary.retirementAge}: {summary.display['portfolio']}")
    print(
        f"Monthly retirement income: {summary.display['monthlyWithdrawal']} "
        f"({summary.withdrawalRate * 100:g}% annual withdrawal)"
    )
    print(f"Future monthly expenses: {summary.display['futureMonthlyExpenses']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
