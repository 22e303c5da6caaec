"""
Caller-facing unique job queue.
"""

from typing import Any

from unique_jobs.constants import CleanupPolicy, JobPriority
from unique_jobs.coordinators import RemovalCoordinator, SubmissionCoordinator
from unique_jobs.observability.metrics import MetricsCollector
from unique_jobs.queue.base import QueueEngine
from unique_jobs.registry.store import RegistryStore
from unique_jobs.registry.unique import UniqueRegistry
from unique_jobs.store.base import KeyValueStore
from unique_jobs.types.job import Job, JobId, SubmitResult


class UniqueJobQueue:
    """
    A job queue with idempotent submission.

    Wraps a queue engine; jobs tagged with a uniqueness key are submitted
    at most once per key while the registered job exists.

    Example:
        queue = UniqueJobQueue.from_store(InMemoryJobQueue(), RedisStore.from_url())
        job = queue.mark_unique(queue.create_job("email", {"to": "a@b.c"}), "order-42")
        job, already_existed = await queue.submit(job)
    """

    def __init__(
        self,
        queue: QueueEngine,
        registry: UniqueRegistry,
        cleanup_policy: CleanupPolicy | None = None,
        metrics: MetricsCollector | None = None,
    ):
        self._queue = queue
        self._registry = registry
        self._submission = SubmissionCoordinator(queue, registry, metrics=metrics)
        self._removal = RemovalCoordinator(
            queue, registry, policy=cleanup_policy, metrics=metrics
        )

    @classmethod
    def from_store(
        cls,
        queue: QueueEngine,
        store: KeyValueStore,
        prefix: str | None = None,
        atomic_updates: bool | None = None,
        cleanup_policy: CleanupPolicy | None = None,
        metrics: MetricsCollector | None = None,
    ) -> "UniqueJobQueue":
        """
        Build a queue whose registry document lives in `store`.

        Args:
            queue: The queue engine jobs are created in.
            store: Backing key-value store for the registry document.
            prefix: Registry key namespace. Defaults to UNIQUE_JOBS_PREFIX.
            atomic_updates: Use compare-and-swap registry updates when the
                store supports them. Defaults to REGISTRY_ATOMIC_UPDATES.
            cleanup_policy: Registry cleanup policy for removals.
            metrics: Metrics collector.
        """
        registry_store = RegistryStore(
            store, prefix=prefix, atomic_updates=atomic_updates, metrics=metrics
        )
        return cls(
            queue,
            UniqueRegistry(registry_store),
            cleanup_policy=cleanup_policy,
            metrics=metrics,
        )

    @property
    def registry(self) -> UniqueRegistry:
        return self._registry

    def create_job(
        self,
        job_type: str,
        data: dict[str, Any] | None = None,
        priority: JobPriority = JobPriority.NORMAL,
    ) -> Job:
        """Build an unsaved job. Call submit() to enqueue it."""
        return Job(type=job_type, data=dict(data or {}), priority=priority)

    def mark_unique(self, job: Job, unique_key: str) -> Job:
        """
        Attach a uniqueness key to a job before submission.

        Raises:
            ValueError: If the key is not a non-empty string.
        """
        return job.unique(unique_key)

    async def submit(self, job: Job) -> SubmitResult:
        """Submit a job. See SubmissionCoordinator.submit."""
        return await self._submission.submit(job)

    async def delete(self, job_id: JobId) -> None:
        """Delete a job and its registry entries. See RemovalCoordinator.remove."""
        await self._removal.remove(job_id)

    async def get_job(self, job_id: JobId) -> Job:
        """Fetch a job from the queue engine."""
        return await self._queue.get(job_id)

    async def lookup(self, unique_key: str) -> JobId | None:
        """Return the job id registered for a uniqueness key, if any."""
        return await self._registry.lookup(unique_key)
