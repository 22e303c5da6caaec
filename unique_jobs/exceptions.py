"""
Exception hierarchy for unique job submission and removal.
"""

from typing import Any


class UniqueJobError(Exception):
    """Base class for all errors raised by this package."""


class StoreAccessError(UniqueJobError):
    """The backing key-value store could not be read or written."""

    def __init__(self, key: str, message: str):
        super().__init__(f"Store access failed for {key!r}: {message}")
        self.key = key


class JobNotFoundError(UniqueJobError):
    """The queue engine has no job with the given id."""

    def __init__(self, job_id: int | str):
        super().__init__(f"Job {job_id!r} not found")
        self.job_id = job_id


class DanglingReferenceError(JobNotFoundError):
    """
    A registry entry points at a job the queue engine no longer has.

    Raised while returning an existing job for a uniqueness key.
    """

    def __init__(self, unique_key: str, job_id: int | str):
        super().__init__(job_id)
        self.unique_key = unique_key
        self.args = (
            f"Unique key {unique_key!r} points at missing job {job_id!r}",
        )


class RegistrationError(StoreAccessError):
    """
    A job was created but its uniqueness key could not be registered.

    The job exists in the queue; `job` holds it.
    """

    def __init__(self, unique_key: str, job: Any, cause: StoreAccessError):
        super().__init__(
            cause.key,
            f"job {job.id!r} created but unique key {unique_key!r} was not registered",
        )
        self.unique_key = unique_key
        self.job = job


class PartialRemovalError(UniqueJobError):
    """Exactly one of job removal and registry cleanup failed."""

    def __init__(self, job_id: int | str, job_removed: bool, registry_cleaned: bool):
        failed = "registry cleanup" if job_removed else "job removal"
        super().__init__(f"Removal of job {job_id!r} partially failed: {failed} failed")
        self.job_id = job_id
        self.job_removed = job_removed
        self.registry_cleaned = registry_cleaned
