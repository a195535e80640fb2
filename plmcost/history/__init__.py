from .log import HISTORY_KEY, HISTORY_LIMIT, HistoryEntry, HistoryLog
from .store import FileStore, InMemoryStore, KeyValueStore

__all__ = [
    "HISTORY_KEY",
    "HISTORY_LIMIT",
    "HistoryEntry",
    "HistoryLog",
    "FileStore",
    "InMemoryStore",
    "KeyValueStore",
]
