"""
In-process queue engine.
"""

import asyncio
import copy
import itertools
import logging
from datetime import datetime, timezone

from unique_jobs.exceptions import JobNotFoundError
from unique_jobs.types.job import Job, JobId

logger = logging.getLogger(__name__)


class InMemoryJobQueue:
    """
    Queue engine keeping jobs in a dict with sequential integer ids.

    Jobs handed out are copies, so flags set by callers (already_exist)
    never leak back into storage.
    """

    def __init__(self) -> None:
        self._jobs: dict[JobId, Job] = {}
        self._ids = itertools.count(1)

    async def create(self, job: Job) -> Job:
        await asyncio.sleep(0)
        job.id = next(self._ids)
        job.created_at = datetime.now(timezone.utc)
        self._jobs[job.id] = copy.deepcopy(job)
        logger.debug("Created job", extra={"job_id": job.id, "job_type": job.type})
        return job

    async def get(self, job_id: JobId) -> Job:
        await asyncio.sleep(0)
        job = self._jobs.get(job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        return copy.deepcopy(job)

    async def remove(self, job_id: JobId) -> None:
        await asyncio.sleep(0)
        if self._jobs.pop(job_id, None) is None:
            raise JobNotFoundError(job_id)
        logger.debug("Removed job", extra={"job_id": job_id})

    def __len__(self) -> int:
        return len(self._jobs)

    def __contains__(self, job_id: object) -> bool:
        return job_id in self._jobs
