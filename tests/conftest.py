"""Shared test configuration and fixtures for ChangeForge test suite."""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add backend to Python path so imports work
backend_dir = str(Path(__file__).parent.parent / "backend")
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)

from changeforge.models.commit import CommitRecord, TagRecord  # noqa: E402
from changeforge.repository.memory import InMemoryProvider  # noqa: E402


def utc(year, month, day, hour=0):
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


@pytest.fixture
def sample_commits():
    """Three commits, newest first: c3, c2, c1."""
    return [
        CommitRecord(id="c3", message="feat(api): new feature", timestamp=utc(2025, 1, 3)),
        CommitRecord(id="c2", message="fix(ui): fix bug", timestamp=utc(2025, 1, 2)),
        CommitRecord(id="c1", message="feat(core): first feature", timestamp=utc(2025, 1, 1)),
    ]


@pytest.fixture
def sample_tags():
    return [TagRecord(name="v1.0.0", target_commit_id="c2", date=utc(2025, 1, 2))]


@pytest.fixture
def memory_provider(sample_commits, sample_tags):
    return InMemoryProvider(commits=sample_commits, tags=sample_tags)


def _git_date(when: datetime) -> str:
    """Git internal date format, accepted by both GitPython and the git binary."""
    return f"{int(when.timestamp())} +0000"


class RepoBuilder:
    """Builds a real git repository with fixed commit and tag dates."""

    def __init__(self, path: Path):
        import git

        self.path = path
        self.repo = git.Repo.init(path)
        with self.repo.config_writer() as cw:
            cw.set_value("user", "name", "ChangeForge Tests")
            cw.set_value("user", "email", "tests@example.com")
        self.actor = git.Actor("ChangeForge Tests", "tests@example.com")
        self._n = 0

    def commit(self, message: str, when: datetime):
        self._n += 1
        f = self.path / f"file{self._n}.txt"
        f.write_text(f"change {self._n}\n", encoding="utf-8")
        self.repo.index.add([str(f)])
        return self.repo.index.commit(
            message,
            author=self.actor,
            committer=self.actor,
            author_date=_git_date(when),
            commit_date=_git_date(when),
        )

    def tag(self, name: str, commit, annotated_at: datetime | None = None):
        if annotated_at is None:
            return self.repo.create_tag(name, ref=commit)
        with self.repo.git.custom_environment(GIT_COMMITTER_DATE=_git_date(annotated_at)):
            return self.repo.create_tag(name, ref=commit, message=f"Release {name}")


@pytest.fixture
def repo_builder(tmp_path):
    """A fresh git repository; skipped when GitPython or the git binary is unavailable."""
    pytest.importorskip("git")
    return RepoBuilder(tmp_path / "repo")
