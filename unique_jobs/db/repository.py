"""
Job repository for database operations.
"""

import logging
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from unique_jobs.constants import JobPriority, JobStatus
from unique_jobs.db.models import JobRecord

logger = logging.getLogger(__name__)


class JobRepository:
    """Data access for the jobs table within one session."""

    def __init__(self, session: AsyncSession):
        """
        Initialize the repository with a database session.

        Args:
            session: The async database session.
        """
        self._session = session

    async def create_job(
        self,
        job_type: str,
        data: dict[str, Any],
        priority: JobPriority = JobPriority.NORMAL,
        status: JobStatus = JobStatus.INACTIVE,
    ) -> JobRecord:
        """
        Insert a job and flush so its id is assigned.

        Args:
            job_type: The job type.
            data: The job data, including any uniqueness key.
            priority: Job priority level.
            status: Initial status.

        Returns:
            The new JobRecord.
        """
        record = JobRecord(
            type=job_type,
            data=data,
            priority=priority,
            status=status,
            attempts=0,
        )
        self._session.add(record)
        await self._session.flush()
        await self._session.refresh(record)

        logger.info(
            "Created new job",
            extra={"job_id": record.id, "job_type": job_type},
        )
        return record

    async def get_job(self, job_id: int) -> JobRecord | None:
        """
        Get a job by ID.

        Returns:
            The JobRecord or None if not found.
        """
        stmt = select(JobRecord).where(JobRecord.id == job_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_job(self, job_id: int) -> bool:
        """
        Delete a job by ID.

        Returns:
            True if a row was deleted.
        """
        stmt = delete(JobRecord).where(JobRecord.id == job_id)
        result = await self._session.execute(stmt)
        deleted = result.rowcount > 0

        if deleted:
            logger.info("Deleted job", extra={"job_id": job_id})

        return deleted
