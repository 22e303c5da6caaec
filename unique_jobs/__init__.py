"""
Unique Jobs

Idempotent job submission for job queues: jobs tagged with a uniqueness key
are registered in a shared registry document so that only one job per key
exists in the queue at a time.
"""

__version__ = "1.0.0"

from unique_jobs.client import UniqueJobQueue
from unique_jobs.types.job import Job, SubmitResult

__all__ = [
    "UniqueJobQueue",
    "Job",
    "SubmitResult",
]
