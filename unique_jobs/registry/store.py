"""
Registry store adapter.

Reads and writes the unique registry document: a single JSON object kept
under one well-known key of the backing store, mapping uniqueness keys to
job ids. The whole document is read and written back on every mutation.
"""

import json
import logging
import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from unique_jobs.config import get_settings
from unique_jobs.constants import (
    REGISTRY_OP_READ,
    REGISTRY_OP_WRITE,
    UNIQUE_JOBS_KEY,
)
from unique_jobs.observability.metrics import MetricsCollector, get_metrics
from unique_jobs.store.base import KeyValueStore, TransactionalKeyValueStore
from unique_jobs.types.job import RegistryDocument

logger = logging.getLogger(__name__)

DocumentUpdate = Callable[[RegistryDocument], RegistryDocument]


def registry_key(prefix: str) -> str:
    """Build the store key holding the registry document."""
    prefix = prefix.strip(":")
    return f"{prefix}:{UNIQUE_JOBS_KEY}" if prefix else UNIQUE_JOBS_KEY


class RegistryStore:
    """
    Adapter between the unique registry and the backing store.

    Absent, null or unparseable content is read as an empty document;
    only store access errors reach the caller.
    """

    def __init__(
        self,
        store: KeyValueStore,
        prefix: str | None = None,
        atomic_updates: bool | None = None,
        max_cas_retries: int | None = None,
        metrics: MetricsCollector | None = None,
    ):
        """
        Initialize the adapter.

        Args:
            store: The backing key-value store.
            prefix: Key namespace. Defaults to UNIQUE_JOBS_PREFIX.
            atomic_updates: Use the store's compare-and-swap for updates when
                it offers one. Defaults to REGISTRY_ATOMIC_UPDATES.
            max_cas_retries: Compare-and-swap attempts per update.
            metrics: Metrics collector. Defaults to the global one.
        """
        settings = get_settings()
        self._store = store
        self._key = registry_key(settings.unique_jobs_prefix if prefix is None else prefix)
        if atomic_updates is None:
            atomic_updates = settings.registry_atomic_updates
        self._atomic = atomic_updates and isinstance(store, TransactionalKeyValueStore)
        self._max_cas_retries = max_cas_retries or settings.registry_max_cas_retries
        self._metrics = metrics or get_metrics()

    @property
    def key(self) -> str:
        """The store key holding the document."""
        return self._key

    @property
    def atomic(self) -> bool:
        """Whether updates run as compare-and-swap."""
        return self._atomic

    @asynccontextmanager
    async def timed(self, operation: str) -> AsyncIterator[None]:
        """Record the duration and ok/error status of a registry operation."""
        started = time.perf_counter()
        try:
            yield
        except Exception:
            self._metrics.record_registry_operation(
                operation, "error", time.perf_counter() - started
            )
            raise
        self._metrics.record_registry_operation(
            operation, "ok", time.perf_counter() - started
        )

    def parse(self, raw: str | bytes | None) -> RegistryDocument:
        """
        Parse a raw document, falling back to an empty one.

        Args:
            raw: Stored content, or None when the key is absent.

        Returns:
            The parsed mapping; a fresh empty dict when content is missing
            or malformed.
        """
        if raw is None:
            return {}
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            self._metrics.record_parse_failure()
            logger.warning(
                "Unparseable unique registry document, treating as empty",
                extra={"key": self._key},
            )
            return {}
        if data is None:
            return {}
        if not isinstance(data, dict):
            self._metrics.record_parse_failure()
            logger.warning(
                "Unique registry document is not a mapping, treating as empty",
                extra={"key": self._key, "type": type(data).__name__},
            )
            return {}
        return data

    def serialize(self, document: RegistryDocument) -> str:
        return json.dumps(document)

    async def read(self) -> RegistryDocument:
        """Fetch and parse the registry document."""
        async with self.timed(REGISTRY_OP_READ):
            raw = await self._store.get(self._key)
        return self.parse(raw)

    async def write(self, document: RegistryDocument) -> None:
        """Replace the stored document with `document`."""
        async with self.timed(REGISTRY_OP_WRITE):
            await self._store.set(self._key, self.serialize(document))

    async def update(self, fn: DocumentUpdate) -> RegistryDocument:
        """
        Apply `fn` to the stored document and write the result back.

        Without atomic updates this is a plain read-modify-write: a
        concurrent writer may be overwritten (last write wins).

        Args:
            fn: Computes the new document from the current one.

        Returns:
            The document that was written.
        """
        if not self._atomic:
            document = fn(await self.read())
            await self.write(document)
            return document

        written: RegistryDocument = {}

        def apply(raw: str | None) -> str:
            nonlocal written
            written = fn(self.parse(raw))
            return self.serialize(written)

        async with self.timed(REGISTRY_OP_WRITE):
            await self._store.transact(self._key, apply, self._max_cas_retries)
        return written
