"""Writer for report exports (CSV, JSON)."""
from typing import Any, Callable, List, Dict, Optional, Union
import json
import logging
from pathlib import Path

import pandas as pd

from windfarm_ops.loaders.base_loader import BaseLoader
from windfarm_ops.config.settings import settings

logger = logging.getLogger(__name__)


def _write_csv(data: List[Dict[str, Any]], path: Path) -> None:
    # Nested dicts (recommendation, raw, ...) become dotted columns
    pd.json_normalize(data).to_csv(path, index=False)


def _write_json(data: List[Dict[str, Any]], path: Path) -> None:
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, default=str)


WRITERS: Dict[str, Callable[[List[Dict[str, Any]], Path], None]] = {
    'csv': _write_csv,
    'json': _write_json,
}


class FileLoader(BaseLoader):
    """
    Export aggregate records (site scorecard, OEM ranking, ...) to files.

    Relative paths are resolved under settings.OUTPUT_DATA_DIR.
    """

    def __init__(self, output_dir: Optional[Union[str, Path]] = None):
        """
        Initialize file loader.

        Args:
            output_dir: Base directory for relative paths
        """
        super().__init__('file')
        self.output_dir = Path(output_dir) if output_dir is not None else settings.OUTPUT_DATA_DIR

    def resolve(self, file_path: Union[str, Path]) -> Path:
        path = Path(file_path)
        return path if path.is_absolute() else self.output_dir / path

    def load(
        self,
        data: List[Dict[str, Any]],
        file_path: Optional[Union[str, Path]] = None,
        format: str = 'csv',
        **kwargs,
    ) -> bool:
        """
        Write records to a file.

        Args:
            data: Aggregate records
            file_path: Output file path
            format: 'csv' or 'json'

        Returns:
            True if the write succeeded, False on an empty input or I/O error

        Raises:
            ValueError: If file_path is missing or the format is unknown
        """
        if not file_path:
            raise ValueError('file_path is required')
        writer = WRITERS.get(format)
        if writer is None:
            raise ValueError(f'Unsupported format: {format}')

        if not data:
            self.logger.warning('No records to write')
            return False

        path = self.resolve(file_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            writer(data, path)
        except OSError as e:
            self.logger.error(f'Export failed for {path}: {e}')
            return False

        self.record_load(len(data), str(path))
        return True
