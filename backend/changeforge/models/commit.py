"""
ChangeForge — Commit and tag records.

CommitRecord and TagRecord are what a repository backend hands over.
ClassifiedCommit is the parsed form every later step works against.
All of them are frozen: once fetched or classified, they never change.
"""

from __future__ import annotations

import enum
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CommitCategory(str, enum.Enum):
    FEATURE = "feature"
    BUG_FIX = "bug_fix"
    DOCUMENTATION = "documentation"
    STYLE = "style"
    REFACTOR = "refactor"
    PERFORMANCE = "performance"
    TESTING = "testing"
    BUILD = "build"
    CI = "ci"
    CHORE = "chore"
    OTHER = "other"


class CommitRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    message: str
    timestamp: datetime


class TagRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    target_commit_id: str
    date: datetime | None = None


class ClassifiedCommit(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    category: CommitCategory
    scope: str | None = None
    message: str
    timestamp: datetime
