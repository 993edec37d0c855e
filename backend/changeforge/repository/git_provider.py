"""
ChangeForge — Live repository backend on GitPython.

Reads commits and tags from a local work tree. Every GitPython failure is
wrapped in RepositoryAccessError so a broken repository aborts the run
before anything is rendered.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path

import git
from git.exc import BadName, BadObject, GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from changeforge.errors import CommitNotFoundError, RepositoryAccessError, RepositoryNotFoundError
from changeforge.models.commit import CommitRecord, TagRecord
from changeforge.utils.logging import logger


def _to_utc(epoch_seconds: int) -> datetime:
    return datetime.fromtimestamp(epoch_seconds, tz=timezone.utc)


class GitPythonProvider:
    """RepositoryProvider backed by a git.Repo."""

    def __init__(self, repo: git.Repo):
        self._repo = repo

    @classmethod
    def open(cls, path: str | Path) -> "GitPythonProvider":
        path = Path(path)
        if not path.exists():
            raise RepositoryNotFoundError(str(path))
        try:
            repo = git.Repo(path)
        except NoSuchPathError:
            raise RepositoryNotFoundError(str(path))
        except InvalidGitRepositoryError:
            raise RepositoryAccessError(f"Not a git repository: {path}")
        logger.info("  Opened repository: %s", repo.working_dir or repo.git_dir)
        return cls(repo)

    def list_commit_ids(self) -> list[str]:
        try:
            return [c.hexsha for c in self._repo.iter_commits("HEAD", date_order=True)]
        except (GitCommandError, ValueError) as exc:
            raise RepositoryAccessError("Could not walk commit history from HEAD", detail=str(exc))

    def get_commit(self, commit_id: str) -> CommitRecord:
        # Commit objects load lazily, so a missing id only surfaces on first read.
        try:
            commit = self._repo.commit(commit_id)
            return CommitRecord(
                id=commit.hexsha,
                message=commit.message,
                timestamp=_to_utc(commit.committed_date),
            )
        except (BadName, BadObject, ValueError):
            raise CommitNotFoundError(commit_id)

    def list_tags(self, pattern: re.Pattern[str]) -> list[TagRecord]:
        try:
            refs = list(self._repo.tags)
        except (GitCommandError, OSError) as exc:
            raise RepositoryAccessError("Could not list tags", detail=str(exc))

        tags: list[TagRecord] = []
        for ref in refs:
            if not pattern.search(ref.name):
                continue
            try:
                target = ref.commit
            except ValueError:
                logger.debug("  Skipping tag %s: does not point at a commit", ref.name)
                continue

            annotation = ref.tag
            if annotation is not None:
                # Annotated tag: dated by its tagger, undated without one.
                # GitPython parses a missing tagger line as a nameless Actor.
                tagger = getattr(annotation, "tagger", None)
                if tagger is None or not tagger.name:
                    date = None
                else:
                    date = _to_utc(annotation.tagged_date)
            else:
                date = _to_utc(target.committed_date)

            tags.append(TagRecord(name=ref.name, target_commit_id=target.hexsha, date=date))

        logger.info("  Found %d matching tags", len(tags))
        return tags
