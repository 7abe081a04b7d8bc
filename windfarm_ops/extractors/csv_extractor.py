"""Extractor for the cases / actions / site locations CSV files."""
from pathlib import Path
from typing import IO, Any, Dict, List, Union
import logging

import pandas as pd

from windfarm_ops.exceptions import DataLoadError
from windfarm_ops.extractors.base_extractor import BaseExtractor
from windfarm_ops.schemas.registry import get_schema_for_dataset
from windfarm_ops.schemas.validator import validate_columns
from windfarm_ops.transformers.normalization import clean_field, normalize_headers

logger = logging.getLogger(__name__)

CSVSource = Union[str, Path, IO[str]]


class CSVExtractor(BaseExtractor):
    """
    Read one input CSV into cleaned, header-normalized row dictionaries.

    The whole file is read as text so no value is coerced before the
    normalization layer sees it. Any failure to read the file as CSV is
    raised as DataLoadError; individual cells never fail here.
    """

    def __init__(self, dataset: str, source: CSVSource):
        """
        Initialize CSV extractor.

        Args:
            dataset: Dataset kind ('cases', 'actions' or 'sites')
            source: File path or open text stream
        """
        super().__init__(dataset)
        self.dataset = dataset
        self.source = source
        self.columns: List[str] = []

    def _source_label(self) -> str:
        if isinstance(self.source, (str, Path)):
            return str(self.source)
        return getattr(self.source, 'name', '<stream>')

    def read_frame(self) -> pd.DataFrame:
        """
        Read the CSV into a string-typed DataFrame with canonical headers.

        Raises:
            DataLoadError: If the file is missing, unreadable or not CSV
        """
        label = self._source_label()
        try:
            df = pd.read_csv(
                self.source,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                encoding='utf-8',
            )
        except FileNotFoundError as e:
            raise DataLoadError(
                f'{self.dataset} file not found: {label}',
                source=self.dataset, path=label,
            ) from e
        except pd.errors.EmptyDataError as e:
            raise DataLoadError(
                f'{self.dataset} file is empty (no header row): {label}',
                source=self.dataset, path=label,
            ) from e
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            raise DataLoadError(
                f'Failed to parse {self.dataset} CSV {label}: {e}',
                source=self.dataset, path=label,
            ) from e
        except OSError as e:
            raise DataLoadError(
                f'Failed to read {self.dataset} file {label}: {e}',
                source=self.dataset, path=label,
            ) from e

        df.columns = normalize_headers(df.columns)
        self.columns = list(df.columns)
        return df

    def extract(self, **kwargs) -> List[Dict[str, Any]]:
        """
        Extract cleaned rows.

        Returns:
            One dictionary per CSV row, keyed by canonical field name, with
            trimmed strings and None for blank cells
        """
        self.logger.info(f'Reading {self.dataset} from {self._source_label()}')
        df = self.read_frame()

        rows = [
            {key: clean_field(value) for key, value in record.items()}
            for record in df.to_dict('records')
        ]
        self.log_extraction(len(rows))
        return rows

    def validate_extraction(self, data: List[Dict[str, Any]]) -> List[str]:
        """
        Check the header row against the dataset's input schema.

        Args:
            data: Extracted rows (unused; the check is on columns)

        Returns:
            Warning messages prefixed with the dataset name
        """
        schema = get_schema_for_dataset(self.dataset)
        if schema is None:
            return []

        messages = [
            f'{self.dataset}: {message}'
            for message in validate_columns(self.columns, schema)
        ]
        for message in messages:
            self.logger.warning(message)
        return messages
