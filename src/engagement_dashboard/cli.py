"""Command-line interface for inspecting an engagement file.

Provides subcommands: `summary`, `goals`, and `projections`. Each command
is implemented as a `cmd_*` function that accepts an argparse namespace and
returns a process exit code.
"""
from __future__ import annotations

import argparse
import logging
import sys

import pandas as pd

from engagement_dashboard.aggregate.goal_tracking import (
    compute_cumulative_variance,
    compute_goal_tracking,
    compute_monthly_goal_view,
)
from engagement_dashboard.aggregate.projections import (
    compute_required_run_rate,
    compute_scenarios,
    compute_ytd_summary,
)
from engagement_dashboard.aggregate.summary import build_dashboard
from engagement_dashboard.aggregate.yearly import compute_annual_goal, previous_year_total
from engagement_dashboard.config import get_settings
from engagement_dashboard.errors import IngestError
from engagement_dashboard.formatting import format_millions, format_pct, fy_label
from engagement_dashboard.ingest.load import load_engagement_data
from engagement_dashboard.logging_config import configure_logging
from engagement_dashboard.models import DashboardData

log = logging.getLogger(__name__)


# --------------------------------------------------
# Helpers
# --------------------------------------------------
def _load(path: str) -> tuple[pd.DataFrame, DashboardData] | None:
    """Load `path` and build the dashboard, logging why when that fails."""
    try:
        rows = load_engagement_data(path)
    except IngestError as e:
        log.error("Could not load %s: %s", path, e)
        return None

    data = build_dashboard(rows)
    if data is None:
        log.error("%s has no rows with a fiscal year", path)
        return None
    return rows, data


def _selected_year(args: argparse.Namespace, data: DashboardData) -> int:
    """Fiscal year requested with `--year`, defaulting to the current one."""
    return args.year if args.year is not None else data.current_fy


# --------------------------------------------------
# SUMMARY
# --------------------------------------------------
def cmd_summary(args: argparse.Namespace) -> int:
    """Print the full dashboard structure as JSON."""
    loaded = _load(args.file)
    if loaded is None:
        return 1
    _, data = loaded
    print(data.model_dump_json(indent=2))
    return 0


# --------------------------------------------------
# GOALS
# --------------------------------------------------
def cmd_goals(args: argparse.Namespace) -> int:
    """Print the goal-tracking table for one fiscal year.

    Args:
        args: argparse namespace with `file`, `year`, and `view`.
    """
    loaded = _load(args.file)
    if loaded is None:
        return 1
    rows, data = loaded
    year = _selected_year(args, data)

    baseline = previous_year_total(data.yearly_totals, year)
    series = data.goal_tracking.get(year) or compute_goal_tracking(year, rows, baseline)
    annual_goal = compute_annual_goal(baseline)

    if args.view == "monthly":
        table = pd.DataFrame(
            [v.model_dump() for v in compute_monthly_goal_view(series, annual_goal)]
        )
    else:
        table = pd.DataFrame([m.model_dump() for m in series])
        table["vs_goal_pct"] = compute_cumulative_variance(series)
        table = table[["month", "goal", "actual", "monthly_total", "vs_goal_pct"]]

    print(f"{fy_label(year)} goal {format_millions(annual_goal)} "
          f"(baseline {fy_label(year - 1)} {format_millions(baseline)})")
    print(table.to_string(index=False))
    return 0


# --------------------------------------------------
# PROJECTIONS
# --------------------------------------------------
def cmd_projections(args: argparse.Namespace) -> int:
    """Print YTD KPIs, year-end scenarios and the required run rate."""
    loaded = _load(args.file)
    if loaded is None:
        return 1
    rows, data = loaded
    year = _selected_year(args, data)

    baseline = previous_year_total(data.yearly_totals, year)
    series = data.goal_tracking.get(year) or compute_goal_tracking(year, rows, baseline)
    ytd = compute_ytd_summary(year, series, baseline)

    print(f"{fy_label(year)}: {ytd.months_complete} months reported")
    print(f"  YTD actual   {format_millions(ytd.ytd_actual)}")
    print(f"  YTD goal     {format_millions(ytd.ytd_goal)} ({format_pct(ytd.pct_of_goal)})")
    print(f"  Annual goal  {format_millions(ytd.annual_goal)}")
    print(f"  Avg / month  {format_millions(ytd.avg_monthly)}")

    scenarios = pd.DataFrame(
        [s.model_dump() for s in compute_scenarios(ytd.ytd_actual, ytd.months_complete, ytd.annual_goal)]
    )
    print(scenarios[["name", "factor", "year_end", "pct_of_goal"]].to_string(index=False))

    run_rate = compute_required_run_rate(ytd.annual_goal, ytd.ytd_actual, ytd.months_complete)
    print(f"Required per month: {format_millions(run_rate.required_monthly)} "
          f"over {run_rate.months_remaining} months "
          f"({format_pct(run_rate.change_required_pct, signed=True)} vs current pace)")
    return 0


# --------------------------------------------------
# CLI
# --------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    p = argparse.ArgumentParser(prog="engagement-dashboard")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_summary = sub.add_parser("summary")
    p_summary.add_argument("file")

    p_goals = sub.add_parser("goals")
    p_goals.add_argument("file")
    p_goals.add_argument("--year", type=int, default=None)
    p_goals.add_argument("--view", choices=["cumulative", "monthly"], default="cumulative")

    p_proj = sub.add_parser("projections")
    p_proj.add_argument("file")
    p_proj.add_argument("--year", type=int, default=None)

    return p


def main(argv: list[str] | None = None) -> int:
    """CLI entry point: parse args, configure logging and dispatch commands."""
    args = build_parser().parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_path, settings.log_level)

    if args.cmd == "summary":
        return cmd_summary(args)
    if args.cmd == "goals":
        return cmd_goals(args)
    if args.cmd == "projections":
        return cmd_projections(args)
    raise SystemExit(2)


if __name__ == "__main__":
    sys.exit(main())
