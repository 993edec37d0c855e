"""
ChangeForge — In-memory repository backend.

Serves a fixed list of commits and tags. Commits are returned in the order
given, which callers must already have arranged newest first.
"""

from __future__ import annotations

import re
from typing import Iterable

from changeforge.errors import CommitNotFoundError
from changeforge.models.commit import CommitRecord, TagRecord


class InMemoryProvider:
    """RepositoryProvider over plain Python data, for tests and embedding."""

    def __init__(self, commits: Iterable[CommitRecord] = (), tags: Iterable[TagRecord] = ()):
        self.commits: list[CommitRecord] = list(commits)
        self.tags: list[TagRecord] = list(tags)
        self._by_id = {c.id: c for c in self.commits}

    def list_commit_ids(self) -> list[str]:
        return [c.id for c in self.commits]

    def get_commit(self, commit_id: str) -> CommitRecord:
        try:
            return self._by_id[commit_id]
        except KeyError:
            raise CommitNotFoundError(commit_id)

    def list_tags(self, pattern: re.Pattern[str]) -> list[TagRecord]:
        return [t for t in self.tags if pattern.search(t.name)]
