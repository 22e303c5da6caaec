"""
Job-related type definitions.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, NamedTuple

from pydantic import BaseModel

from unique_jobs.constants import UNIQUE_DATA_FIELD, JobPriority, JobStatus

JobId = int | str

# Uniqueness key -> job id, as persisted in the registry document.
RegistryDocument = dict[str, JobId]


@dataclass
class Job:
    """
    A job as seen by callers of the unique job queue.

    The queue engine assigns `id` on creation. `already_exist` is transient:
    it is set only on jobs returned for a uniqueness key that was already
    registered, and is never persisted.
    """

    type: str
    data: dict[str, Any] = field(default_factory=dict)
    id: JobId | None = None
    status: JobStatus = JobStatus.INACTIVE
    priority: JobPriority = JobPriority.NORMAL
    attempts: int = 0
    created_at: datetime | None = None
    already_exist: bool = field(default=False, compare=False)

    def unique(self, key: str) -> "Job":
        """
        Tag the job with a uniqueness key.

        Args:
            key: Caller-chosen key; only one job per key is kept in the queue.

        Returns:
            The job itself, so calls can be chained.

        Raises:
            ValueError: If the key is not a non-empty string.
        """
        if not isinstance(key, str) or not key:
            raise ValueError("Unique key must be a non-empty string")
        if self.data is None:
            self.data = {}
        self.data[UNIQUE_DATA_FIELD] = key
        return self

    @property
    def unique_key(self) -> str | None:
        """The job's uniqueness key, or None when the job is not unique."""
        if not self.data:
            return None
        key = self.data.get(UNIQUE_DATA_FIELD)
        return key or None

    @property
    def is_unique(self) -> bool:
        """Check if the job carries a uniqueness key."""
        return self.unique_key is not None


class SubmitResult(NamedTuple):
    """Outcome of submitting a job."""

    job: Job
    already_existed: bool


class RegistryEntry(BaseModel):
    """A single uniqueness key mapping, used for diagnostics output."""

    unique_key: str
    job_id: JobId
