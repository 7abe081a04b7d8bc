"""
Persisted dashboard preferences.

A small JSON key/value file holds the saved filter selection. Missing or
unreadable state is never an error: callers fall back to defaults.
"""
from typing import Any, Dict, Optional
import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from windfarm_ops.config.settings import settings
from windfarm_ops.config.thresholds import STORAGE_KEYS
from windfarm_ops.schemas.filters import DashboardFilters, PersistedState

logger = logging.getLogger(__name__)


class FilterStateStore:
    """JSON key/value store backed by a single file."""

    def __init__(self, path: Optional[Path] = None):
        """
        Initialize the store.

        Args:
            path: State file (defaults to settings.get_state_path())
        """
        self.path = Path(path) if path is not None else settings.get_state_path()
        self.logger = logging.getLogger(f'{__name__}.{self.path.name}')

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                contents = json.load(f)
        except (OSError, ValueError) as e:
            self.logger.warning(f'Ignoring unreadable state file {self.path}: {e}')
            return {}
        if not isinstance(contents, dict):
            self.logger.warning(f'Ignoring state file {self.path}: not a JSON object')
            return {}
        return contents

    def load(self, key: str) -> Optional[Any]:
        """Stored value for key, or None when absent or unreadable."""
        return self._read_all().get(key)

    def save(self, key: str, value: Any) -> None:
        """
        Store a JSON-serializable value under key.

        The file is rewritten through a temporary file and an atomic replace,
        so a crash never leaves a half-written state file behind.
        """
        contents = self._read_all()
        contents[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f'.{self.path.name}.', suffix='.tmp'
        )
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(contents, f, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        self.logger.debug(f'Saved {key} to {self.path}')


def persist_filters(store: FilterStateStore, filters: DashboardFilters, now: datetime) -> None:
    """
    Save a filter selection.

    Date-range bounds are written as ISO strings.
    """
    state = PersistedState(filters=filters, last_updated=now.isoformat())
    store.save(STORAGE_KEYS['dashboardFilters'], state.model_dump(mode='json'))


def load_persisted_filters(store: FilterStateStore) -> Optional[DashboardFilters]:
    """
    Restore a saved filter selection.

    Returns:
        DashboardFilters, or None when nothing usable was saved
    """
    raw = store.load(STORAGE_KEYS['dashboardFilters'])
    if raw is None:
        return None
    try:
        return PersistedState.model_validate(raw).filters
    except ValidationError as e:
        logger.warning(f'Ignoring persisted filters: {e.error_count()} validation errors')
        return None
