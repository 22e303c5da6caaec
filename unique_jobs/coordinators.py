"""
Submission and removal coordinators.

Submission of a job carrying a uniqueness key goes:

    check registry -> return the registered job, or
                   -> create the job -> register it

Removal deletes the job and drops its registry entries.

The registry is a shared document updated by read-modify-write, so two
concurrent submissions with the same key can both miss the lookup and both
create a job; the registry then points at whichever merge landed last.
"""

import asyncio
import logging

from unique_jobs.config import get_settings
from unique_jobs.constants import (
    SPAN_REMOVE_JOB,
    SPAN_SUBMIT_JOB,
    CleanupPolicy,
    SubmitOutcome,
)
from unique_jobs.exceptions import (
    DanglingReferenceError,
    JobNotFoundError,
    PartialRemovalError,
    RegistrationError,
    StoreAccessError,
)
from unique_jobs.observability.metrics import MetricsCollector, get_metrics
from unique_jobs.observability.tracing import get_tracer
from unique_jobs.queue.base import QueueEngine
from unique_jobs.registry.unique import UniqueRegistry
from unique_jobs.types.job import Job, JobId, SubmitResult

logger = logging.getLogger(__name__)


class SubmissionCoordinator:
    """Creates jobs, returning the already registered job for known uniqueness keys."""

    def __init__(
        self,
        queue: QueueEngine,
        registry: UniqueRegistry,
        metrics: MetricsCollector | None = None,
    ):
        self._queue = queue
        self._registry = registry
        self._metrics = metrics or get_metrics()

    async def submit(self, job: Job) -> SubmitResult:
        """
        Submit a job.

        Jobs without a uniqueness key are created directly and never touch
        the registry.

        Args:
            job: The job to submit.

        Returns:
            SubmitResult with the created or existing job. For an existing
            job, `already_existed` is True and `job.already_exist` is set.

        Raises:
            DanglingReferenceError: The key is registered to a job the queue
                no longer has.
            RegistrationError: The job was created but could not be registered.
            StoreAccessError: The registry could not be read.
            ValueError: The job carries a uniqueness key that is not a string.
        """
        unique_key = job.unique_key
        if unique_key is not None and not isinstance(unique_key, str):
            raise ValueError("Unique key must be a non-empty string")

        with get_tracer().start_as_current_span(SPAN_SUBMIT_JOB) as span:
            span.set_attribute("job.type", job.type)

            if unique_key is None:
                created = await self._queue.create(job)
                self._metrics.record_submission(SubmitOutcome.PASSTHROUGH)
                return SubmitResult(created, False)

            span.set_attribute("job.unique_key", unique_key)

            existing_id = await self._registry.lookup(unique_key)
            if existing_id is not None:
                existing = await self._fetch_existing(unique_key, existing_id)
                span.set_attribute("job.already_exist", True)
                return SubmitResult(existing, True)

            created = await self._queue.create(job)
            try:
                await self._registry.merge(unique_key, created.id)
            except StoreAccessError as e:
                logger.error(
                    "Job created but unique key not registered",
                    extra={"job_id": created.id, "unique_key": unique_key},
                )
                raise RegistrationError(unique_key, created, e) from e

            self._metrics.record_submission(SubmitOutcome.CREATED)
            logger.info(
                "Created unique job",
                extra={"job_id": created.id, "unique_key": unique_key},
            )
            return SubmitResult(created, False)

    async def _fetch_existing(self, unique_key: str, job_id: JobId) -> Job:
        try:
            job = await self._queue.get(job_id)
        except JobNotFoundError as e:
            logger.warning(
                "Unique key points at a missing job",
                extra={"job_id": job_id, "unique_key": unique_key},
            )
            raise DanglingReferenceError(unique_key, job_id) from e

        job.already_exist = True
        self._metrics.record_submission(SubmitOutcome.EXISTING)
        logger.info(
            "Returned existing job (unique)",
            extra={"job_id": job_id, "unique_key": unique_key},
        )
        return job


class RemovalCoordinator:
    """Removes jobs from the queue together with their registry entries."""

    def __init__(
        self,
        queue: QueueEngine,
        registry: UniqueRegistry,
        policy: CleanupPolicy | None = None,
        metrics: MetricsCollector | None = None,
    ):
        """
        Args:
            queue: The queue engine.
            registry: The unique registry.
            policy: When to clean the registry. Defaults to REMOVAL_CLEANUP_POLICY.
            metrics: Metrics collector. Defaults to the global one.
        """
        self._queue = queue
        self._registry = registry
        self._policy = policy or get_settings().removal_cleanup_policy
        self._metrics = metrics or get_metrics()

    @property
    def policy(self) -> CleanupPolicy:
        return self._policy

    async def remove(self, job_id: JobId) -> None:
        """
        Remove a job and its registry entries.

        Raises:
            PartialRemovalError: One of the two steps failed; the other one
                has been applied. The underlying error is chained.
            Exception: The queue engine's error when both steps failed, or
                when it failed under the ON_SUCCESS policy.
        """
        with get_tracer().start_as_current_span(SPAN_REMOVE_JOB) as span:
            span.set_attribute("job.id", str(job_id))
            span.set_attribute("cleanup.policy", self._policy.value)

            if self._policy is CleanupPolicy.ON_SUCCESS:
                job_error, registry_error = await self._remove_then_clean(job_id)
            else:
                job_error, registry_error = await self._remove_and_clean(job_id)

            if job_error is None and registry_error is None:
                self._metrics.record_removal("ok")
                logger.info("Removed job", extra={"job_id": job_id})
                return

            if job_error is not None and (
                registry_error is not None or self._policy is CleanupPolicy.ON_SUCCESS
            ):
                self._metrics.record_removal("failed")
                raise job_error

            self._metrics.record_removal("partial")
            error = job_error or registry_error
            logger.warning(
                "Job removal partially failed",
                extra={
                    "job_id": job_id,
                    "job_removed": job_error is None,
                    "registry_cleaned": registry_error is None,
                    "error": str(error),
                },
            )
            raise PartialRemovalError(
                job_id,
                job_removed=job_error is None,
                registry_cleaned=registry_error is None,
            ) from error

    async def _remove_and_clean(
        self, job_id: JobId
    ) -> tuple[Exception | None, Exception | None]:
        results = await asyncio.gather(
            self._queue.remove(job_id),
            self._registry.remove_by_job_id(job_id),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException) and not isinstance(result, Exception):
                raise result
        job_result, registry_result = results
        return (
            job_result if isinstance(job_result, Exception) else None,
            registry_result if isinstance(registry_result, Exception) else None,
        )

    async def _remove_then_clean(
        self, job_id: JobId
    ) -> tuple[Exception | None, Exception | None]:
        try:
            await self._queue.remove(job_id)
        except Exception as e:
            return e, None
        try:
            await self._registry.remove_by_job_id(job_id)
        except Exception as e:
            return None, e
        return None, None
