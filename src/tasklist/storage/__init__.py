"""Built-in task store implementations."""

from .json_file_store import JsonFileTaskStore
from .memory_store import InMemoryTaskStore

__all__ = [
    "InMemoryTaskStore",
    "JsonFileTaskStore",
]
