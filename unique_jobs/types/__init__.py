"""
Type definitions shared across the registry, coordinators and queue engines.
"""

from unique_jobs.types.job import (
    Job,
    JobId,
    RegistryDocument,
    RegistryEntry,
    SubmitResult,
)

__all__ = [
    "Job",
    "JobId",
    "RegistryDocument",
    "RegistryEntry",
    "SubmitResult",
]
