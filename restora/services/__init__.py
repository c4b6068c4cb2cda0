from .history import CacheStorage, HistoryStore
from .interpreter import interpret_response

__all__ = [
    "CacheStorage",
    "HistoryStore",
    "interpret_response",
]
