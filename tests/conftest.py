"""
Pytest configuration and shared fixtures.
"""

from uuid import uuid4

import pytest
from prometheus_client import CollectorRegistry

from tests.helpers import RecordingStore
from unique_jobs.client import UniqueJobQueue
from unique_jobs.observability.metrics import MetricsCollector
from unique_jobs.queue.memory import InMemoryJobQueue
from unique_jobs.registry.store import RegistryStore
from unique_jobs.registry.unique import UniqueRegistry


@pytest.fixture
def metrics() -> MetricsCollector:
    """Metrics collector on a private registry."""
    return MetricsCollector(registry=CollectorRegistry())


@pytest.fixture
def kv_store() -> RecordingStore:
    """Backing store for the registry document."""
    return RecordingStore()


@pytest.fixture
def registry_store(kv_store: RecordingStore, metrics: MetricsCollector) -> RegistryStore:
    """Registry document adapter over the test store."""
    return RegistryStore(kv_store, prefix="q", atomic_updates=False, metrics=metrics)


@pytest.fixture
def registry(registry_store: RegistryStore) -> UniqueRegistry:
    """Unique registry over the test store."""
    return UniqueRegistry(registry_store)


@pytest.fixture
def job_queue() -> InMemoryJobQueue:
    """In-memory queue engine."""
    return InMemoryJobQueue()


@pytest.fixture
def unique_queue(
    job_queue: InMemoryJobQueue,
    registry: UniqueRegistry,
    metrics: MetricsCollector,
) -> UniqueJobQueue:
    """Unique job queue wired to the in-memory engine and store."""
    return UniqueJobQueue(job_queue, registry, metrics=metrics)


@pytest.fixture
def unique_key() -> str:
    """Generate a unique uniqueness key."""
    return f"order-{uuid4().hex[:8]}"
