"""
Database module.
Contains database connection, models, and repository implementations.
"""

from unique_jobs.db.connection import (
    close_db,
    create_session_factory,
    get_engine,
    init_db,
    session_scope,
)
from unique_jobs.db.models import Base, JobRecord
from unique_jobs.db.repository import JobRepository

__all__ = [
    "get_engine",
    "create_session_factory",
    "init_db",
    "close_db",
    "session_scope",
    "Base",
    "JobRecord",
    "JobRepository",
]
