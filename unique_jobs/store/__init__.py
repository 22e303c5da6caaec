"""
Backing key-value stores for the unique registry document.
"""

from unique_jobs.store.base import KeyValueStore, TransactionalKeyValueStore
from unique_jobs.store.memory import InMemoryStore
from unique_jobs.store.redis import RedisStore

__all__ = [
    "KeyValueStore",
    "TransactionalKeyValueStore",
    "InMemoryStore",
    "RedisStore",
]
