"""ChangeForge repository backends — anything satisfying RepositoryProvider."""

from changeforge.repository.provider import RepositoryProvider
from changeforge.repository.memory import InMemoryProvider

__all__ = [
    "RepositoryProvider",
    "InMemoryProvider",
]
