"""Unit tests for the state store and the report file loader."""
import json

import pandas as pd
import pytest

from windfarm_ops.config.thresholds import STORAGE_KEYS
from windfarm_ops.kpi.filters import get_default_filters
from windfarm_ops.loaders import (
    FileLoader,
    FilterStateStore,
    load_persisted_filters,
    persist_filters,
)
from windfarm_ops.schemas.enums import Severity


@pytest.fixture
def store(tmp_path):
    """State store in a temporary directory."""
    return FilterStateStore(tmp_path / 'state' / 'dashboard_state.json')


class TestFilterStateStore:
    """Test the JSON key/value store."""

    def test_missing_file(self, store):
        """Nothing saved yet reads as None."""
        assert store.load('anything') is None

    def test_save_and_load(self, store):
        """Values round-trip and other keys are kept."""
        store.save('a', {'x': 1})
        store.save('b', [1, 2])
        assert store.load('a') == {'x': 1}
        assert store.load('b') == [1, 2]

    def test_corrupt_file(self, store):
        """Unparseable content reads as None."""
        store.path.parent.mkdir(parents=True)
        store.path.write_text('{not json', encoding='utf-8')
        assert store.load('a') is None

    def test_non_object_file(self, store):
        """A JSON value that is not an object is ignored."""
        store.path.parent.mkdir(parents=True)
        store.path.write_text('[1, 2, 3]', encoding='utf-8')
        assert store.load('a') is None

    def test_no_temp_files_left(self, store):
        """The atomic write cleans up after itself."""
        store.save('a', 1)
        assert [p.name for p in store.path.parent.iterdir()] == ['dashboard_state.json']


class TestPersistedFilters:
    """Test saving and restoring the filter selection."""

    def test_round_trip(self, store, now):
        """Saved filters come back equal, with ISO dates on disk."""
        filters = get_default_filters(now).model_copy(update={
            'sites': ['S1'],
            'severities': [Severity.CRITICAL],
            'open_only': True,
        })
        persist_filters(store, filters, now)

        raw = json.loads(store.path.read_text(encoding='utf-8'))
        saved = raw[STORAGE_KEYS['dashboardFilters']]
        assert saved['last_updated'] == now.isoformat()
        assert saved['filters']['date_range']['end'] == now.isoformat()

        assert load_persisted_filters(store) == filters

    def test_nothing_saved(self, store):
        """No saved filters gives None."""
        assert load_persisted_filters(store) is None

    def test_invalid_saved_filters(self, store):
        """A saved value that fails validation gives None."""
        store.save(STORAGE_KEYS['dashboardFilters'], {'filters': {'statuses': ['Lost']}})
        assert load_persisted_filters(store) is None


class TestFileLoader:
    """Test report export."""

    def test_csv_export_flattens(self, tmp_path):
        """Nested records become dotted columns."""
        loader = FileLoader(tmp_path)
        records = [
            {'site_id': 'S1', 'recommendation': {'action': 'Monitor and maintain'}},
            {'site_id': 'S2', 'recommendation': {'action': 'Excellent performance'}},
        ]
        assert loader.load(records, file_path='sites.csv') is True

        df = pd.read_csv(tmp_path / 'sites.csv')
        assert list(df.columns) == ['site_id', 'recommendation.action']
        assert loader.validate_load(2) is True
        assert loader.get_load_stats()['destination'] == str(tmp_path / 'sites.csv')

    def test_json_export(self, tmp_path):
        """JSON exports keep the records as-is."""
        loader = FileLoader(tmp_path)
        assert loader.load([{'make': 'GE', 'rank': 1}], file_path='out/oem.json', format='json')
        assert json.loads((tmp_path / 'out' / 'oem.json').read_text()) == [{'make': 'GE', 'rank': 1}]

    def test_empty_records(self, tmp_path):
        """Nothing to write is reported as a failed load."""
        loader = FileLoader(tmp_path)
        assert loader.load([], file_path='x.csv') is False
        assert loader.validate_load(0) is False

    def test_bad_arguments(self, tmp_path):
        """A missing path or an unknown format is rejected."""
        loader = FileLoader(tmp_path)
        with pytest.raises(ValueError):
            loader.load([{'a': 1}])
        with pytest.raises(ValueError):
            loader.load([{'a': 1}], file_path='x.parquet', format='parquet')
