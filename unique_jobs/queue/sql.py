"""
Queue engine backed by the SQL jobs table.
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from unique_jobs.db.connection import session_scope
from unique_jobs.db.models import JobRecord
from unique_jobs.db.repository import JobRepository
from unique_jobs.exceptions import JobNotFoundError
from unique_jobs.types.job import Job, JobId


def _to_job(record: JobRecord) -> Job:
    return Job(
        id=record.id,
        type=record.type,
        data=dict(record.data or {}),
        status=record.status,
        priority=record.priority,
        attempts=record.attempts,
        created_at=record.created_at,
    )


def _coerce_id(job_id: JobId) -> int:
    # Rows are keyed by integer id; "1" matches no row, as in the registry.
    if isinstance(job_id, bool) or not isinstance(job_id, int):
        raise JobNotFoundError(job_id)
    return job_id


class SqlJobQueue:
    """
    QueueEngine over the jobs table.

    Each operation runs in its own session, committed on success.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None):
        """
        Args:
            session_factory: Session factory. Defaults to the one set up by init_db().
        """
        self._session_factory = session_factory

    async def create(self, job: Job) -> Job:
        async with session_scope(self._session_factory) as session:
            record = await JobRepository(session).create_job(
                job_type=job.type,
                data=job.data,
                priority=job.priority,
                status=job.status,
            )
            job.id = record.id
            job.created_at = record.created_at
        return job

    async def get(self, job_id: JobId) -> Job:
        async with session_scope(self._session_factory) as session:
            record = await JobRepository(session).get_job(_coerce_id(job_id))
            if record is None:
                raise JobNotFoundError(job_id)
            return _to_job(record)

    async def remove(self, job_id: JobId) -> None:
        async with session_scope(self._session_factory) as session:
            deleted = await JobRepository(session).delete_job(_coerce_id(job_id))
        if not deleted:
            raise JobNotFoundError(job_id)
