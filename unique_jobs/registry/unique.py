"""
Unique registry: uniqueness key -> job id lookups and mutations.
"""

import logging

from unique_jobs.constants import REGISTRY_OP_MERGE, REGISTRY_OP_REMOVE
from unique_jobs.registry.store import RegistryStore
from unique_jobs.types.job import JobId, RegistryDocument, RegistryEntry

logger = logging.getLogger(__name__)


class UniqueRegistry:
    """
    Registry of uniqueness keys over a shared RegistryStore.

    Every call reads the current document; mutations write the whole
    document back. Store errors propagate unchanged and are not retried.
    """

    def __init__(self, store: RegistryStore):
        self._store = store

    @property
    def store(self) -> RegistryStore:
        return self._store

    async def snapshot(self) -> RegistryDocument:
        """Return the whole registry document."""
        return await self._store.read()

    async def entries(self) -> list[RegistryEntry]:
        """Return the registry as a list of entries."""
        document = await self.snapshot()
        return [
            RegistryEntry(unique_key=key, job_id=job_id)
            for key, job_id in sorted(document.items())
        ]

    async def lookup(self, unique_key: str) -> JobId | None:
        """
        Find the job registered for a uniqueness key.

        Args:
            unique_key: The uniqueness key.

        Returns:
            The registered job id, or None if the key is not registered.
        """
        document = await self.snapshot()
        return document.get(unique_key)

    async def merge(self, unique_key: str, job_id: JobId) -> RegistryDocument:
        """
        Register `job_id` under `unique_key`, replacing any previous entry.

        Returns:
            The updated document.
        """

        def apply(document: RegistryDocument) -> RegistryDocument:
            previous = document.get(unique_key)
            if previous is not None and previous != job_id:
                logger.warning(
                    "Overwriting unique registry entry",
                    extra={
                        "unique_key": unique_key,
                        "previous_job_id": previous,
                        "job_id": job_id,
                    },
                )
            return {**document, unique_key: job_id}

        async with self._store.timed(REGISTRY_OP_MERGE):
            return await self._store.update(apply)

    async def remove_by_job_id(self, job_id: JobId) -> RegistryDocument:
        """
        Drop every entry that points at `job_id`.

        Returns:
            The updated document.
        """
        async with self._store.timed(REGISTRY_OP_REMOVE):
            return await self._store.update(
                lambda document: {
                    key: value for key, value in document.items() if value != job_id
                }
            )
