"""
ChangeForge — Commit classifier.

Turns the first line of a commit message into a ClassifiedCommit using a
conventional-commit style pattern:

  type(scope): message
  type: message

Messages that do not match are not an error. They land in OTHER with the
whole first line kept as the message, so nothing is dropped.
"""

from __future__ import annotations

import re

from changeforge.errors import PatternCompilationError
from changeforge.models.commit import ClassifiedCommit, CommitCategory, CommitRecord

DEFAULT_COMMIT_PATTERN = r"^(?P<type>\w+)(?:\((?P<scope>.+)\))?:\s(?P<message>.+)$"
DEFAULT_VERSION_PATTERN = r"^v?(\d+\.\d+\.\d+)$"

REQUIRED_COMMIT_GROUPS = ("type", "message")

# Case-sensitive; anything else is OTHER.
PREFIX_CATEGORIES: dict[str, CommitCategory] = {
    "feat": CommitCategory.FEATURE,
    "fix": CommitCategory.BUG_FIX,
    "doc": CommitCategory.DOCUMENTATION,
    "style": CommitCategory.STYLE,
    "refactor": CommitCategory.REFACTOR,
    "perf": CommitCategory.PERFORMANCE,
    "test": CommitCategory.TESTING,
    "build": CommitCategory.BUILD,
    "ci": CommitCategory.CI,
    "chore": CommitCategory.CHORE,
}


def _compile(kind: str, pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise PatternCompilationError(kind, pattern, str(exc))


def compile_commit_pattern(pattern: str | None = None) -> re.Pattern[str]:
    """Compile a commit pattern, checking it exposes the groups classify() reads."""
    source = pattern or DEFAULT_COMMIT_PATTERN
    compiled = _compile("commit", source)
    missing = [g for g in REQUIRED_COMMIT_GROUPS if g not in compiled.groupindex]
    if missing:
        raise PatternCompilationError(
            "commit", source, f"missing named group(s): {', '.join(missing)}"
        )
    return compiled


def compile_version_pattern(pattern: str | None = None) -> re.Pattern[str]:
    return _compile("version", pattern or DEFAULT_VERSION_PATTERN)


def category_for(prefix: str) -> CommitCategory:
    return PREFIX_CATEGORIES.get(prefix, CommitCategory.OTHER)


def first_line(message: str) -> str:
    lines = message.strip().splitlines()
    return lines[0].strip() if lines else ""


def classify(raw: CommitRecord, commit_pattern: re.Pattern[str]) -> ClassifiedCommit:
    """Classify one commit. Pure: the same record and pattern give the same result."""
    line = first_line(raw.message)
    match = commit_pattern.search(line)

    if match is None:
        return ClassifiedCommit(
            id=raw.id,
            category=CommitCategory.OTHER,
            scope=None,
            message=line,
            timestamp=raw.timestamp,
        )

    groups = match.groupdict()
    return ClassifiedCommit(
        id=raw.id,
        category=category_for(groups.get("type") or ""),
        scope=groups.get("scope"),
        message=groups.get("message") or "",
        timestamp=raw.timestamp,
    )
