"""
Backing key-value store interfaces.
"""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

# Computes the new raw value from the current one (None when absent).
UpdateFn = Callable[[str | None], str]


@runtime_checkable
class KeyValueStore(Protocol):
    """
    Minimal store contract used by the unique registry.

    Implementations raise StoreAccessError on any transport failure.
    """

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...


@runtime_checkable
class TransactionalKeyValueStore(KeyValueStore, Protocol):
    """A store that can apply a read-modify-write cycle as compare-and-swap."""

    async def transact(self, key: str, fn: UpdateFn, max_retries: int) -> str: ...
