"""Pytest configuration and fixtures."""
import pytest
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Callable, Dict

from windfarm_ops.schemas.entities import Action, Case, SiteLocation
from windfarm_ops.transformers.action_transformer import build_action
from windfarm_ops.transformers.case_transformer import build_case

# Fixed reference instant; no test reads the clock.
NOW = datetime(2025, 6, 15, 12, 0, 0)


@pytest.fixture
def now() -> datetime:
    """Reference instant shared by every time-dependent test."""
    return NOW


@pytest.fixture
def case_factory(now) -> Callable[..., Case]:
    """Build a Case from a row, with sensible defaults for every column."""
    counter = {'n': 0}

    def make(**fields: Any) -> Case:
        counter['n'] += 1
        row: Dict[str, Any] = {
            'id': f"C{counter['n']:03d}",
            'site_id': 'S1',
            'site_name': 'Site One',
            'turbine_id': 'T1',
            'turbine_name': 'Turbine 1',
            'turbine_make': 'Vestas V90',
            'component_name': 'GEARBOX',
            'failure_mode_name': 'BEARING_WEAR',
            'severity': 'High',
            'created_at': now - timedelta(days=1),
        }
        row.update(fields)
        return build_case(row, now)

    return make


@pytest.fixture
def action_factory(now) -> Callable[..., Action]:
    """Build an Action from a row, with sensible defaults for every column."""
    counter = {'n': 0}

    def make(**fields: Any) -> Action:
        counter['n'] += 1
        row: Dict[str, Any] = {
            'action_id': f"A{counter['n']:03d}",
            'case_id': 'C001',
            'status': 'Open',
            'priority': 'High',
            'created_at': now - timedelta(days=1),
            'updated_at': now - timedelta(days=1),
        }
        row.update(fields)
        return build_action(row, now)

    return make


@pytest.fixture
def sample_sites():
    """Two site locations."""
    return [
        SiteLocation(site_id='S1', site_name='Site One', latitude=55.1, longitude=-3.2),
        SiteLocation(site_id='S2', site_name='Site Two', latitude=56.4, longitude=-4.0),
    ]


@pytest.fixture
def csv_files(tmp_path) -> Dict[str, Path]:
    """Three small input CSVs with the header spellings seen in exports."""
    cases = tmp_path / 'cases.csv'
    cases.write_text(
        'ID,Site ID,Site Name,Turbine ID,Turbine Name,Turbine Make,'
        'Component Name,Failure Mode Name,Severity,Created At,Inspected At,'
        'Confirmed At,Closed At,Updated At\n'
        'C1,S1,Site One,T1,WTG-01,Vestas V90,GEARBOX,BEARING_WEAR,Critical,'
        '2025-05-01T08:00:00,2025-05-01T10:00:00,,,2025-05-02T08:00:00\n'
        'C2,S1,Site One,T2,WTG-02,Vestas V90,CMS_DAQ_SYSTEM,NO_DATA,p2,'
        '2025-06-14T09:00:00,,,2025-06-15T09:00:00,2025-06-15T09:00:00\n'
        'C3,S9,Site Nine,T9,WTG-09,GE 2.8-127,BLADE,CRACK,  low  ,'
        'not-a-date,,,,\n',
        encoding='utf-8',
    )

    actions = tmp_path / 'actions.csv'
    actions.write_text(
        'Action ID,Case ID,Status,Priority,Priority Changed,Created At,Updated At,Deadline,Activity\n'
        'A1,C1,Open,P1,yes,2025-05-02T08:00:00,2025-06-14T08:00:00,2025-06-01T00:00:00,Replace bearing\n'
        'A2,C1,Done,High,no,2025-05-02T08:00:00,2025-05-20T08:00:00,2025-05-25T00:00:00,Inspect\n'
        'A3,C404,In Progress,Medium,,2025-06-10T08:00:00,2025-06-10T08:00:00,,Orphan\n',
        encoding='utf-8',
    )

    sites = tmp_path / 'sites.csv'
    sites.write_text(
        'Site ID,Site Name,Latitude,Longitude\n'
        'S1,Site One,55.1,-3.2\n'
        'S2,Site Two,not-a-number,-4.0\n',
        encoding='utf-8',
    )

    return {'cases': cases, 'actions': actions, 'sites': sites}
