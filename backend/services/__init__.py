"""Services module - Business logic layer"""

from .change_aggregator import ChangeAggregator, aggregate_changes
from .config_manager import ConfigManager
from .diff_generator import DiffGenerator
from .file_change_store import FileChangeStore

__all__ = [
    "ChangeAggregator",
    "aggregate_changes",
    "ConfigManager",
    "DiffGenerator",
    "FileChangeStore",
]
