"""
ChangeForge — Repository access contract.

The segmenter only needs three capabilities from a repository. Any object
exposing them satisfies the protocol; no base class is involved.
"""

from __future__ import annotations

import re
from typing import Protocol, Sequence, runtime_checkable

from changeforge.models.commit import CommitRecord, TagRecord


@runtime_checkable
class RepositoryProvider(Protocol):
    def list_commit_ids(self) -> Sequence[str]:
        """Commit ids reachable from HEAD, newest first by commit time."""
        ...

    def get_commit(self, commit_id: str) -> CommitRecord:
        ...

    def list_tags(self, pattern: re.Pattern[str]) -> Sequence[TagRecord]:
        """Tags whose name matches ``pattern``, resolved to their target commit."""
        ...
