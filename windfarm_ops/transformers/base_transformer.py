"""Base transformer class for turning cleaned rows into entities."""
from abc import ABC, abstractmethod
from typing import Any, List, Dict, Tuple
import logging
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class BaseTransformer(ABC):
    """
    Abstract base for the per-dataset transformers.

    transform() builds one entity per row and never drops a row;
    validate_transformation() describes what was wrong with the input.
    """

    def __init__(self, name: str):
        """
        Initialize the transformer.

        Args:
            name: Dataset name (for logging)
        """
        self.name = name
        self.logger = logging.getLogger(f'{__name__}.{name}')

    @abstractmethod
    def transform(self, data: List[Dict[str, Any]]) -> List[BaseModel]:
        """
        Build entities from rows.

        Args:
            data: Header-normalized, cleaned row dictionaries

        Returns:
            One entity per input row
        """
        pass

    @abstractmethod
    def validate_transformation(self, data: List[BaseModel]) -> List[str]:
        """
        Describe data-quality problems in the rows just transformed.

        Returns:
            Warning messages (empty when nothing worth reporting)
        """
        pass

    def report(self, warnings: List[str]) -> List[str]:
        """Log each warning and hand the list back."""
        for message in warnings:
            self.logger.warning(message)
        return warnings

    def run(self, data: List[Dict[str, Any]]) -> Tuple[List[BaseModel], List[str]]:
        """transform() then validate_transformation()."""
        entities = self.transform(data)
        return entities, self.validate_transformation(entities)
