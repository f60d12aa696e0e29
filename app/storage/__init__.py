"""
app/storage package marker.
"""

from app.storage.memory_store import MemoryStore, StoreSnapshot, get_memory_store

__all__ = [
    "MemoryStore",
    "StoreSnapshot",
    "get_memory_store",
]
