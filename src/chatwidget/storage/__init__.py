"""Local persistence module for chatwidget.

Provides transcript persistence over swappable key/value stores.
"""

from .base import KeyValueStore
from .factory import create_key_value_store
from .in_memory import InMemoryKeyValueStore
from .json_file import DEFAULT_STORAGE_PATH, JsonFileKeyValueStore
from .transcript import STORAGE_KEY, TranscriptStore

__all__ = [
    "DEFAULT_STORAGE_PATH",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "STORAGE_KEY",
    "TranscriptStore",
    "create_key_value_store",
]
