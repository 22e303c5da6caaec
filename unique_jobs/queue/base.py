"""
Queue engine interface.

The unique job coordinators compose a queue engine's plain create/get/remove
operations; they never change job state themselves.
"""

from typing import Protocol, runtime_checkable

from unique_jobs.types.job import Job, JobId


@runtime_checkable
class QueueEngine(Protocol):
    """
    Job lifecycle operations provided by a job queue.

    - create: persist the job, assign and set its id, return it
    - get: fetch a job by id, raising JobNotFoundError if missing
    - remove: delete a job by id, raising JobNotFoundError if missing
    """

    async def create(self, job: Job) -> Job: ...

    async def get(self, job_id: JobId) -> Job: ...

    async def remove(self, job_id: JobId) -> None: ...
