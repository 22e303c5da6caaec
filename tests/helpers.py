"""
Test doubles and helpers shared by the test modules.
"""

from unique_jobs.exceptions import StoreAccessError
from unique_jobs.observability.metrics import MetricsCollector
from unique_jobs.store.memory import InMemoryStore

REGISTRY_KEY = "q:unique:jobs"


class RecordingStore(InMemoryStore):
    """InMemoryStore that remembers every call made against it."""

    def __init__(self, data: dict[str, str] | None = None):
        super().__init__(data)
        self.calls: list[tuple[str, str]] = []

    async def get(self, key: str) -> str | None:
        self.calls.append(("get", key))
        return await super().get(key)

    async def set(self, key: str, value: str) -> None:
        self.calls.append(("set", key))
        await super().set(key, value)


class FailingStore(InMemoryStore):
    """InMemoryStore whose selected operations raise StoreAccessError."""

    def __init__(self, data: dict[str, str] | None = None, fail_on: set[str] | None = None):
        super().__init__(data)
        self.fail_on = fail_on if fail_on is not None else {"get", "set"}

    async def get(self, key: str) -> str | None:
        if "get" in self.fail_on:
            raise StoreAccessError(key, "connection refused")
        return await super().get(key)

    async def set(self, key: str, value: str) -> None:
        if "set" in self.fail_on:
            raise StoreAccessError(key, "connection refused")
        await super().set(key, value)


def metric_value(metrics: MetricsCollector, name: str, **labels: str) -> float:
    """Read a sample from the collector's registry (0.0 when never recorded)."""
    return metrics.registry.get_sample_value(name, labels) or 0.0
