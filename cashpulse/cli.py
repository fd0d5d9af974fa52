#!/usr/bin/env python3
"""
CashPulse CLI — compute metrics from a CSV export, project forward, export, or serve the API.

USAGE:
  python -m cashpulse.cli metrics transactions.csv          # FinancialMetrics as JSON
  python -m cashpulse.cli metrics transactions.csv --pretty
  python -m cashpulse.cli forecast transactions.csv         # Next month / quarter / year
  python -m cashpulse.cli export transactions.csv           # Metrics workbook (.xlsx)
  python -m cashpulse.cli export transactions.csv --output ./out/metrics.xlsx
  python -m cashpulse.cli template                          # Print the sample CSV layout

  python -m cashpulse.cli serve                             # Start API server
  python -m cashpulse.cli serve --port 8000
"""
from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path

from cashpulse.config import DEFAULT_USER_ID, EXPORTS_FOLDER
from cashpulse.analytics.forecast import generate_forecast
from cashpulse.analytics.metrics import compute_metrics
from cashpulse.data.normalize import load_transactions, sample_template
from cashpulse.errors import ParseError, ValidationError


def _load_metrics(path: str) -> dict:
    csv_text = Path(path).read_text(encoding="utf-8-sig")
    return compute_metrics(load_transactions(csv_text, DEFAULT_USER_ID))


def _dump(data: dict, pretty: bool) -> None:
    print(json.dumps(data, indent=2 if pretty else None))


def cmd_metrics(args) -> None:
    _dump(_load_metrics(args.csv), args.pretty)


def cmd_forecast(args) -> None:
    _dump(generate_forecast(_load_metrics(args.csv)), args.pretty)


def cmd_export(args) -> None:
    """Write the metrics workbook."""
    from cashpulse.reports.metrics_workbook import generate_excel

    print("\n" + "=" * 70)
    print("  CASHPULSE — METRICS EXPORT")
    print("=" * 70)

    metrics = _load_metrics(args.csv)
    if args.output:
        out = Path(args.output)
    else:
        out = EXPORTS_FOLDER / f"Financial_Metrics_{datetime.now():%Y%m%d_%H%M%S}.xlsx"
    generate_excel(metrics, out, title=args.title)

    print(f"\n  Revenue:   ${metrics['totalRevenue']:>14,.2f}")
    print(f"  Expenses:  ${metrics['totalExpenses']:>14,.2f}")
    print(f"  Net:       ${metrics['netCashFlow']:>14,.2f}")
    print(f"  Runway:    {metrics['runway']:>15.1f} months")
    print(f"  Target areas flagged: {len(metrics['targetAreas'])}")
    print(f"\n  Workbook saved to: {out}")
    print("=" * 70 + "\n")


def cmd_template(args) -> None:
    sys.stdout.write(sample_template())


def cmd_serve(args) -> None:
    import uvicorn

    uvicorn.run("cashpulse.main:app", host=args.host, port=args.port, reload=args.reload)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cashpulse", description="CashPulse financial metrics")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("metrics", help="Compute FinancialMetrics from a CSV file")
    p.add_argument("csv")
    p.add_argument("--pretty", action="store_true")
    p.set_defaults(func=cmd_metrics)

    p = sub.add_parser("forecast", help="Project revenue/expenses forward")
    p.add_argument("csv")
    p.add_argument("--pretty", action="store_true")
    p.set_defaults(func=cmd_forecast)

    p = sub.add_parser("export", help="Write the metrics workbook (.xlsx)")
    p.add_argument("csv")
    p.add_argument("--output", "-o", default=None)
    p.add_argument("--title", default="Financial Metrics")
    p.set_defaults(func=cmd_export)

    p = sub.add_parser("template", help="Print the sample CSV template")
    p.set_defaults(func=cmd_template)

    p = sub.add_parser("serve", help="Start the API server")
    p.add_argument("--host", default="0.0.0.0")
    p.add_argument("--port", type=int, default=8000)
    p.add_argument("--reload", action="store_true")
    p.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        args.func(args)
    except (ParseError, ValidationError) as exc:
        print(f"  {exc}", file=sys.stderr)
        return 1
    except FileNotFoundError as exc:
        print(f"  File not found: {exc.filename}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
