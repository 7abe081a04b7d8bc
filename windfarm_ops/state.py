"""
Application state for a dashboard session.

DashboardState holds the loaded dataset, the current filter selection and
the drill-down position. It is created by the caller and passed to whatever
renders the dashboard; the aggregation functions never read it.
"""
import logging
from datetime import datetime
from typing import List, Optional

from windfarm_ops.config.thresholds import STORAGE_KEYS
from windfarm_ops.exceptions import DataLoadError
from windfarm_ops.extractors.csv_extractor import CSVSource
from windfarm_ops.kpi.filters import get_default_filters
from windfarm_ops.loaders.state_loader import (
    FilterStateStore,
    load_persisted_filters,
    persist_filters,
)
from windfarm_ops.pipeline import load_dataset_sync
from windfarm_ops.schemas.dataset import DrilldownState, LoadedData
from windfarm_ops.schemas.entities import Action, Case, SiteLocation
from windfarm_ops.schemas.filters import DashboardFilters

logger = logging.getLogger(__name__)


class DashboardState:
    """Mutable session state; every update replaces whole values."""

    def __init__(self, now: datetime, store: Optional[FilterStateStore] = None):
        """
        Initialize an empty session.

        Args:
            now: Reference instant for the default filters
            store: Where filters are persisted (defaults to the settings path)
        """
        self.cases: List[Case] = []
        self.actions: List[Action] = []
        self.sites: List[SiteLocation] = []
        self.loaded_data: Optional[LoadedData] = None
        self.is_loading = False
        self.error: Optional[str] = None

        self.filters: DashboardFilters = get_default_filters(now)
        self.drilldown = DrilldownState()
        self.store = store if store is not None else FilterStateStore()

    def load_csv_files(
        self,
        cases_path: CSVSource,
        actions_path: CSVSource,
        sites_path: CSVSource,
        now: Optional[datetime] = None,
    ) -> bool:
        """
        Load a new dataset, replacing the current one.

        A parse-fatal failure is recorded in `error`; the previous dataset
        stays in place and loading can be retried.

        Args:
            cases_path: Cases CSV
            actions_path: Actions CSV
            sites_path: Site locations CSV
            now: Load time (defaults to the current time)

        Returns:
            True if the dataset was replaced
        """
        if now is None:
            now = datetime.now()

        self.is_loading = True
        self.error = None
        try:
            loaded = load_dataset_sync(cases_path, actions_path, sites_path, now)
        except DataLoadError as e:
            logger.error(f'Load failed: {e}')
            self.error = str(e)
            return False
        finally:
            self.is_loading = False

        self.cases = loaded.cases
        self.actions = loaded.actions
        self.sites = loaded.sites
        self.loaded_data = loaded
        self.reset_drilldown()
        self._record_last_load(now)
        return True

    def set_filters(self, **partial) -> DashboardFilters:
        """Replace the given filter fields, keeping the others."""
        self.filters = DashboardFilters.model_validate({
            **self.filters.model_dump(),
            **partial,
        })
        return self.filters

    def reset_filters(self, now: datetime) -> DashboardFilters:
        """Back to the defaults, and persist them."""
        self.filters = get_default_filters(now)
        self.persist_filters(now)
        return self.filters

    def set_drilldown(self, **partial) -> DrilldownState:
        """Replace the given drill-down fields, keeping the others."""
        self.drilldown = DrilldownState.model_validate({
            **self.drilldown.model_dump(),
            **partial,
        })
        return self.drilldown

    def reset_drilldown(self) -> DrilldownState:
        """Back to the fleet view."""
        self.drilldown = DrilldownState()
        return self.drilldown

    def persist_filters(self, now: Optional[datetime] = None) -> None:
        """Save the current filters; a write failure is logged, not raised."""
        if now is None:
            now = datetime.now()
        try:
            persist_filters(self.store, self.filters, now)
        except OSError as e:
            logger.error(f'Failed to persist filters: {e}')

    def load_persisted_filters(self) -> bool:
        """
        Restore saved filters if there are any.

        Returns:
            True if saved filters were applied
        """
        filters = load_persisted_filters(self.store)
        if filters is None:
            return False
        self.filters = filters
        return True

    def _record_last_load(self, now: datetime) -> None:
        try:
            self.store.save(STORAGE_KEYS['lastDataLoad'], now.isoformat())
        except OSError as e:
            logger.error(f'Failed to record load time: {e}')

    def last_load_time(self) -> Optional[datetime]:
        """When data was last loaded successfully, from the persisted state."""
        raw = self.store.load(STORAGE_KEYS['lastDataLoad'])
        if not isinstance(raw, str):
            return None
        try:
            return datetime.fromisoformat(raw)
        except ValueError:
            return None
