"""
ChangeForge — Segmented changelog data.

A Version is one release worth of classified commits, grouped by category.
Bucket order is encounter order; display order is decided at render time.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field

from changeforge.models.commit import ClassifiedCommit, CommitCategory

UNRELEASED = "unreleased"


class OutputFormat(str, enum.Enum):
    MARKDOWN = "markdown"
    HTML = "html"


class SortOrder(str, enum.Enum):
    NEWEST = "newest"
    OLDEST = "oldest"


class Version(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    date: datetime | None = None
    commits_by_category: dict[CommitCategory, list[ClassifiedCommit]] = Field(default_factory=dict)
    # Set only on the synthetic version; a tag may itself be named "unreleased".
    is_unreleased: bool = False

    @property
    def commit_count(self) -> int:
        return sum(len(commits) for commits in self.commits_by_category.values())

    def iter_commits(self) -> Iterator[ClassifiedCommit]:
        for commits in self.commits_by_category.values():
            yield from commits
