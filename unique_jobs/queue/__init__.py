"""
Queue engines the unique job coordinators delegate to.
"""

from unique_jobs.queue.base import QueueEngine
from unique_jobs.queue.memory import InMemoryJobQueue
from unique_jobs.queue.sql import SqlJobQueue

__all__ = [
    "QueueEngine",
    "InMemoryJobQueue",
    "SqlJobQueue",
]
