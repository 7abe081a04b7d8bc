from .base_loader import BaseLoader
from .file_loader import FileLoader
from .state_loader import FilterStateStore, load_persisted_filters, persist_filters

__all__ = [
    'BaseLoader',
    'FileLoader',
    'FilterStateStore',
    'load_persisted_filters',
    'persist_filters',
]
