"""
ChangeForge — Version segmenter.

Walks the commit stream newest first and cuts it into releases. A commit
targeted by a matching tag is a release boundary: the release being built
is closed, and a new one named after the tag is opened with that commit as
its newest entry. Commits seen before the first boundary form the
synthetic "unreleased" version.

Every input commit ends up in exactly one version and exactly one bucket.
Versions that would be empty are never emitted.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Iterator

from changeforge.models.changelog import UNRELEASED, SortOrder, Version
from changeforge.models.commit import ClassifiedCommit, CommitCategory, CommitRecord, TagRecord
from changeforge.pipeline.classify import classify
from changeforge.repository.provider import RepositoryProvider
from changeforge.utils.logging import logger


def build_tag_index(tags: Iterable[TagRecord]) -> tuple[dict[str, TagRecord], list[str]]:
    """
    Map target commit id -> tag.

    When several tags target the same commit, the lexicographically greatest
    name wins regardless of provider order. Returns the index and one warning
    per discarded tag.
    """
    index: dict[str, TagRecord] = {}
    warnings: list[str] = []

    for tag in tags:
        held = index.get(tag.target_commit_id)
        if held is None:
            index[tag.target_commit_id] = tag
            continue
        winner, loser = (tag, held) if tag.name > held.name else (held, tag)
        index[tag.target_commit_id] = winner
        msg = f"Tags {winner.name} and {loser.name} target the same commit {tag.target_commit_id[:12]}; using {winner.name}"
        logger.warning("  %s", msg)
        warnings.append(msg)

    return index, warnings


@dataclass
class _OpenRelease:
    """The release currently being filled. Replaced, never reused, at each boundary."""

    name: str
    date: datetime | None = None
    commits: list[ClassifiedCommit] = field(default_factory=list)
    unreleased: bool = False

    def close(self) -> Version:
        buckets: dict[CommitCategory, list[ClassifiedCommit]] = {}
        for commit in self.commits:
            buckets.setdefault(commit.category, []).append(commit)
        return Version(
            name=self.name,
            date=self.date,
            commits_by_category=buckets,
            is_unreleased=self.unreleased,
        )


def segment(
    commits: Iterable[CommitRecord],
    tag_index: dict[str, TagRecord],
    commit_pattern: re.Pattern[str],
) -> list[Version]:
    """Partition commits (newest first) into versions, newest version first."""
    versions: list[Version] = []
    current = _OpenRelease(name=UNRELEASED, unreleased=True)

    for record in commits:
        classified = classify(record, commit_pattern)

        tag = tag_index.get(record.id)
        if tag is not None:
            if current.commits:
                versions.append(current.close())
            current = _OpenRelease(name=tag.name, date=tag.date)

        current.commits.append(classified)

    if current.commits:
        versions.append(current.close())

    return versions


def apply_sort_order(versions: list[Version], order: SortOrder) -> list[Version]:
    if order == SortOrder.OLDEST:
        return list(reversed(versions))
    return list(versions)


def iter_history(provider: RepositoryProvider) -> Iterator[CommitRecord]:
    """Yield commit records in the provider's traversal order."""
    for commit_id in provider.list_commit_ids():
        yield provider.get_commit(commit_id)
