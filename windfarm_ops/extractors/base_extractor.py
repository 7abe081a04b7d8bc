"""Base extractor class for all input datasets."""
from abc import ABC, abstractmethod
from typing import Any, List, Dict
import logging

logger = logging.getLogger(__name__)


class BaseExtractor(ABC):
    """
    Abstract base class for all data extractors.
    Defines the interface that all extractors must implement.
    """

    def __init__(self, name: str):
        """
        Initialize the extractor.

        Args:
            name: Name of the extractor (for logging)
        """
        self.name = name
        self.logger = logging.getLogger(f'{__name__}.{name}')
        self.record_count = 0

    @abstractmethod
    def extract(self, **kwargs) -> List[Dict[str, Any]]:
        """
        Extract rows from the source.

        Returns:
            List of dictionaries containing extracted rows
        """
        pass

    @abstractmethod
    def validate_extraction(self, data: List[Dict[str, Any]]) -> List[str]:
        """
        Validate the extracted rows.

        Args:
            data: Extracted rows to validate

        Returns:
            Data-quality messages (empty when the extraction looks complete)
        """
        pass

    def log_extraction(self, record_count: int) -> None:
        """Record and log how many rows were read."""
        self.record_count = record_count
        self.logger.info(f'Extraction completed: {record_count} records extracted')
