"""
Unique job registry.
Contains the registry document adapter and the registry operations.
"""

from unique_jobs.registry.store import RegistryStore, registry_key
from unique_jobs.registry.unique import UniqueRegistry

__all__ = [
    "RegistryStore",
    "UniqueRegistry",
    "registry_key",
]
