"""
CLI interface for the maintenance dashboard core.

Loads the three CSV exports and prints validation findings and the
requested aggregates, as text or JSON.
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict

from pydantic import BaseModel

from windfarm_ops.config.settings import settings
from windfarm_ops.exceptions import DataLoadError
from windfarm_ops.loaders import FileLoader
from windfarm_ops.kpi import (
    compute_backlog_growth,
    compute_case_trend,
    compute_daily_changes,
    compute_kpis,
    compute_site_kpis,
    compute_turbine_make_metrics,
    get_default_filters,
    rank_oem_reliability,
)
from windfarm_ops.pipeline import load_dataset_sync
from windfarm_ops.schemas.dataset import LoadedData
from windfarm_ops.schemas.filters import DashboardFilters, DateRange
from windfarm_ops.schemas.enums import DatePreset
from windfarm_ops.scoring import compute_site_scorecard
from windfarm_ops.utils.logger import configure_logging

REPORTS = ('kpis', 'sites', 'oem', 'changes', 'trends')

# Tabular sections written by --export
EXPORTABLE = ('sites', 'oem')


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the package logger; DEBUG when verbose."""
    logger = configure_logging('windfarm_ops')
    if verbose:
        logger.setLevel(logging.DEBUG)
    return logger


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode='json')
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f'Object of type {type(value).__name__} is not JSON serializable')


def build_reports(
    data: LoadedData,
    report: str,
    now: datetime,
    method: str = 'percentile',
    hours: int = 24,
    all_time: bool = False,
) -> Dict[str, Any]:
    """
    Compute the requested report sections.

    Args:
        data: Loaded dataset
        report: One of REPORTS, or 'all'
        now: Reference instant
        method: OEM ranking method
        hours: Look-back window for the changes report
        all_time: Compute KPIs over every case instead of the last 30 days

    Returns:
        Mapping of section name to aggregate
    """
    sections = REPORTS if report == 'all' else (report,)
    result: Dict[str, Any] = {}

    if 'kpis' in sections:
        if all_time:
            filters = DashboardFilters(date_range=DateRange(preset=DatePreset.ALL_TIME))
        else:
            filters = get_default_filters(now)
        result['kpis'] = compute_kpis(data.cases, data.actions, filters, now)
    if 'sites' in sections:
        result['sites'] = compute_site_scorecard(compute_site_kpis(data.cases, data.actions))
    if 'oem' in sections:
        result['oem'] = rank_oem_reliability(compute_turbine_make_metrics(data.cases), method)
    if 'changes' in sections:
        result['changes'] = compute_daily_changes(data.cases, data.actions, now, hours)
    if 'trends' in sections:
        result['trends'] = {
            'cases': compute_case_trend(data.cases, now, settings.DEFAULT_TREND_DAYS),
            'backlog': compute_backlog_growth(data.cases, now, settings.DEFAULT_BACKLOG_DAYS),
        }

    return result


def export_reports(reports: Dict[str, Any], output_dir: Path) -> Dict[str, str]:
    """
    Write the tabular report sections as CSV files.

    Returns:
        Section name -> written file path, for the sections that had rows
    """
    loader = FileLoader(output_dir)
    written = {}
    for section in EXPORTABLE:
        records = reports.get(section)
        if records and loader.load(records, file_path=f'{section}.csv', format='csv'):
            written[section] = loader.destination
    return written


def print_summary(data: LoadedData, reports: Dict[str, Any]) -> None:
    """Short human-readable rendering of the reports."""
    print("\n=== Dataset ===")
    print(f"Cases:    {len(data.cases)}")
    print(f"Actions:  {len(data.actions)}")
    print(f"Sites:    {len(data.sites)}")
    print(f"Loaded:   {data.loaded_at.isoformat(timespec='seconds')}")

    if data.validation.errors:
        print("\nErrors:")
        for message in data.validation.errors:
            print(f"  {message}")
    if data.validation.warnings:
        print("\nWarnings:")
        for message in data.validation.warnings:
            print(f"  {message}")

    if 'kpis' in reports:
        kpis = reports['kpis']
        print("\n=== KPIs ===")
        print(f"Open cases:            {kpis['open_cases']['total']}")
        for severity, count in kpis['open_cases']['by_severity'].items():
            print(f"  {severity:<10} {count}")
        print(f"Critical backlog >14d: {kpis['critical_backlog_14d']}")
        print(f"SLA hit rate (30d):    {kpis['sla_hit_rate_30d']['rate'] * 100:.1f}%")
        print(f"Overdue actions:       {kpis['overdue_actions']}")
        print(f"Priority churn:        {kpis['priority_churn_percent']:.1f}%")

    if 'sites' in reports:
        print("\n=== Sites ===")
        for site in reports['sites']:
            print(
                f"  {site['site_id']:<12} health {site['health_score']:>3} "
                f"open {site['open_cases']:>4} critical {site['critical_cases']:>3} "
                f"overdue {site['overdue_actions']:>3}  {site['recommendation']['action']}"
            )

    if 'oem' in reports:
        print("\n=== OEM reliability ===")
        for make in reports['oem']:
            print(
                f"  #{make['rank']:<3} {make['make']:<24} score {make['reliability_score']:>3} "
                f"cases/turbine {make['cases_per_turbine']:.2f} "
                f"critical {make['critical_rate']:.1f}%"
            )

    if 'changes' in reports:
        changes = reports['changes']
        print(f"\n=== Last {changes['window_hours']}h ===")
        print(f"New cases:             {changes['new_cases']['total']}")
        print(f"New critical:          {changes['new_critical']}")
        print(f"New actions:           {changes['new_actions']['total']}")
        print(f"Closed cases:          {changes['closed_cases']}")
        print(f"Priority escalations:  {changes['priority_escalations']['total']}")

    if 'trends' in reports:
        backlog = reports['trends']['backlog']
        created = sum(point['total'] for point in reports['trends']['cases'])
        print("\n=== Trends ===")
        print(f"Cases created ({len(reports['trends']['cases'])}d): {created}")
        if backlog:
            print(f"Backlog {backlog[0]['date']}: {backlog[0]['net_backlog']}")
            print(f"Backlog {backlog[-1]['date']}: {backlog[-1]['net_backlog']}")


def main(argv=None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Compute wind-farm maintenance KPIs from CSV exports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Everything, as text
  python -m windfarm_ops cases.csv actions.csv sites.csv

  # OEM ranking with z-score normalization, as JSON
  python -m windfarm_ops cases.csv actions.csv sites.csv --report oem --method zscore --json

  # What changed in the last 3 days
  python -m windfarm_ops cases.csv actions.csv sites.csv --report changes --hours 72
""",
    )

    parser.add_argument("cases_csv", type=Path, help="Cases CSV file")
    parser.add_argument("actions_csv", type=Path, help="Actions CSV file")
    parser.add_argument("sites_csv", type=Path, help="Site locations CSV file")
    parser.add_argument(
        "--report",
        choices=REPORTS + ('all',),
        default='all',
        help="Report to print (default: all)",
    )
    parser.add_argument(
        "--method",
        choices=('percentile', 'zscore'),
        default='percentile',
        help="OEM ranking method (default: percentile)",
    )
    parser.add_argument(
        "--hours",
        type=int,
        default=settings.DEFAULT_CHANGE_WINDOW_HOURS,
        help=f"Look-back window for the changes report (default: {settings.DEFAULT_CHANGE_WINDOW_HOURS})",
    )
    parser.add_argument(
        "--all-time",
        action="store_true",
        help="Compute KPIs over all cases instead of the last 30 days",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="as_json",
        help="Print JSON instead of a text summary",
    )
    parser.add_argument(
        "--export",
        type=Path,
        metavar="DIR",
        help="Also write the sites and oem reports as CSV files into DIR",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)
    logger = setup_logging(args.verbose)

    for problem in settings.validate_required_settings():
        logger.warning(f"Configuration: {problem}")

    now = datetime.now()
    try:
        data = load_dataset_sync(args.cases_csv, args.actions_csv, args.sites_csv, now)
    except DataLoadError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    reports = build_reports(
        data,
        args.report,
        now,
        method=args.method,
        hours=args.hours,
        all_time=args.all_time,
    )

    if args.as_json:
        payload = {
            'validation': data.validation.model_dump(mode='json', exclude={'orphaned_actions'}),
            **reports,
        }
        print(json.dumps(payload, indent=2, default=_json_default))
    else:
        print_summary(data, reports)

    if args.export:
        written = export_reports(reports, args.export)
        for section, path in written.items():
            logger.info(f"Exported {section} report to {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
