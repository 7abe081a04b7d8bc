"""Base class for writers that take aggregate records out of the core."""
from abc import ABC, abstractmethod
from typing import Any, List, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class BaseLoader(ABC):
    """
    Abstract base for report writers.

    Subclasses write records somewhere and call record_load() on success;
    the base keeps the count and destination for validate_load() and
    get_load_stats().
    """

    def __init__(self, name: str):
        """
        Initialize the loader.

        Args:
            name: Name of the loader (for logging)
        """
        self.name = name
        self.logger = logging.getLogger(f'{__name__}.{name}')
        self.loaded_count = 0
        self.destination: Optional[str] = None

    @abstractmethod
    def load(self, data: List[Dict[str, Any]], **kwargs) -> bool:
        """
        Write aggregate records.

        Args:
            data: Records, one dictionary each
            **kwargs: Destination-specific parameters

        Returns:
            True if the write succeeded
        """
        pass

    def record_load(self, count: int, destination: str) -> None:
        """Remember a successful write."""
        self.loaded_count = count
        self.destination = destination
        self.logger.info(f'Wrote {count} records to {destination}')

    def validate_load(self, record_count: int) -> bool:
        """True when the last write covered record_count records."""
        return self.destination is not None and self.loaded_count == record_count

    def get_load_stats(self) -> Dict[str, Any]:
        """Get statistics about the last write."""
        return {
            'loader': self.name,
            'destination': self.destination,
            'loaded_count': self.loaded_count,
        }
