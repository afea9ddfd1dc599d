"""Source file storage backends."""

from .base import FileStore
from .memory import InMemoryFileStore
from .sql import SqlFileStore

__all__ = [
    "FileStore",
    "InMemoryFileStore",
    "SqlFileStore",
]
