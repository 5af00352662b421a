"""CLI entry point for wealthplan."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from .months import InvalidMonthFormat, parse_month
from .report import build_report, write_report
from .schema import SchemaError, load_state
from .validate import validate_state
from .wealth import SIM_MODES


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Monthly cash flow projection and wealth planner")
    parser.add_argument("state", help="Path to financial state JSON file")
    parser.add_argument("-o", "--output", default="report.json", help="Output JSON report path")
    parser.add_argument("--mode", choices=sorted(SIM_MODES), default="projected", help="Wealth simulation mode")
    parser.add_argument("--years", type=int, default=20, help="Years to simulate (default: 20)")
    parser.add_argument("--today", help="Pin the current month (YYYY-MM) instead of using the clock")
    parser.add_argument("--validate", action="store_true", help="Validate JSON only")
    parser.add_argument("--summary", action="store_true", help="Print text summary to stdout")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _print_validation(errors: list[str], warnings: list[str]) -> None:
    for warning in warnings:
        print(f"WARNING: {warning}")
    for error in errors:
        print(f"ERROR: {error}", file=sys.stderr)


def _print_summary(report: dict) -> None:
    summary = report["summary"]
    wealth = summary["wealth"]
    current = summary["currentMonth"]
    print(f"Month: {report['today']}")
    print(f"Projected surplus: ${current['projected_performance']:,.2f} ({current['savings_rate']:.1f}% {current['savings_rate_label']})")
    print(f"Average future surplus: ${summary['averageFutureSurplus']:,.2f}")
    print(f"Average future expense: ${summary['averageFutureExpense']:,.2f}")
    print(f"Net worth: ${wealth['net_worth']:,.0f}")
    print(f"Emergency fund: {wealth['emergency_fund_progress']:.0f}% of ${wealth['emergency_fund_goal']:,.0f}")
    if report["wealth"]:
        last = report["wealth"][-1]
        print(f"Mode: {report['mode']}")
        print(f"Value after {last['year']} years: ${last['contributed'] + last['growth']:,.0f}")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.years < 0:
        print("--years must be >= 0", file=sys.stderr)
        return 2
    if args.today is not None:
        try:
            parse_month(args.today)
        except InvalidMonthFormat as exc:
            print(f"--today: {exc}", file=sys.stderr)
            return 2

    try:
        state = load_state(args.state)
    except (SchemaError, OSError, ValueError) as exc:
        print(f"Failed to load state: {exc}", file=sys.stderr)
        return 2

    validation = validate_state(state)
    _print_validation(validation.errors, validation.warnings)
    if not validation.is_valid:
        return 1

    if args.validate:
        print("State is valid.")
        return 0

    report = build_report(state, years=args.years, mode=args.mode, today=args.today)
    write_report(args.output, report)
    if args.summary:
        _print_summary(report)
    print(f"Wrote report to {Path(args.output)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
