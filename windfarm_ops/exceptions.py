"""Exception types raised by the dashboard core."""
from pathlib import Path
from typing import Optional, Union


class DashboardError(Exception):
    """Base class for all dashboard core errors."""


class DataLoadError(DashboardError):
    """
    Raised when a CSV input cannot be read at all.

    Field-level problems never raise; this is reserved for files that are
    missing, unreadable, undecodable or not parseable as CSV.
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        path: Optional[Union[str, Path]] = None,
    ):
        super().__init__(message)
        self.source = source
        self.path = str(path) if path is not None else None
