"""
ChangeForge — Changelog job orchestrator.

Runs the changelog pipeline as a state machine:

  RECEIVED → PATTERNS_COMPILED → REPOSITORY_OPENED → SEGMENTED
  → RENDERED → WRITTEN → DELIVERED

Each step is timed, logged, and recorded in the JobResult. Patterns are
compiled before the repository is touched, and nothing is written unless
every earlier step succeeded.
"""

from __future__ import annotations

import hashlib
import time
import uuid
from pathlib import Path

from changeforge.models.changelog import OutputFormat, SortOrder, Version
from changeforge.models.job import ArtifactMetadata, JobResult, JobState, StepTiming
from changeforge.pipeline.classify import compile_commit_pattern, compile_version_pattern
from changeforge.pipeline.segment import apply_sort_order, build_tag_index, iter_history, segment
from changeforge.render.document import render, write_document
from changeforge.repository.provider import RepositoryProvider
from changeforge.utils.logging import logger, step_timer


class PipelineContext:
    """Mutable context passed through pipeline steps."""

    def __init__(self):
        self.provider: RepositoryProvider | None = None
        self.commit_regex = None
        self.version_regex = None
        self.versions: list[Version] = []
        self.document: str = ""
        self.written_path: Path | None = None
        self.warnings: list[str] = []


class ChangelogJob:
    """
    State-machine orchestrator for one changelog run.

    Pass ``provider`` to use an already opened backend (tests, the API);
    otherwise ``repository`` is opened with GitPython. With ``output_path``
    left as None the document is rendered but not written.
    """

    def __init__(
        self,
        repository: str | Path = ".",
        output_path: str | Path | None = None,
        title: str = "Changelog",
        output_format: OutputFormat = OutputFormat.MARKDOWN,
        sort_order: SortOrder = SortOrder.NEWEST,
        commit_pattern: str | None = None,
        version_pattern: str | None = None,
        provider: RepositoryProvider | None = None,
    ):
        self.job_id = uuid.uuid4().hex[:12]
        self.repository = repository
        self.output_path = Path(output_path) if output_path is not None else None
        self.title = title
        self.output_format = OutputFormat(output_format)
        self.sort_order = SortOrder(sort_order)
        self.commit_pattern = commit_pattern
        self.version_pattern = version_pattern
        self.state = JobState.RECEIVED
        self.ctx = PipelineContext()
        self.ctx.provider = provider
        self.timings: list[StepTiming] = []

    def _record_step(self, name: str, start: float, status: str = "ok", detail: str = ""):
        ms = int((time.perf_counter() - start) * 1000)
        self.timings.append(StepTiming(step=name, duration_ms=ms, status=status, detail=detail))
        symbol = "✓" if status == "ok" else ("⊘" if status == "skipped" else "✗")
        logger.info("  %s %s — %dms %s", symbol, name, ms, detail)

    def run(self) -> JobResult:
        """Execute the full pipeline. Returns a complete JobResult."""
        logger.info("[%s] Changelog run starting (format=%s, order=%s)",
                    self.job_id, self.output_format.value, self.sort_order.value)
        pipeline_start = time.perf_counter()

        try:
            self._step_compile_patterns()
            self._step_open_repository()
            self._step_segment()
            self._step_render()
            self._step_write()
            self.state = JobState.DELIVERED
        except Exception:
            self.state = JobState.FAILED
            raise

        encoded = self.ctx.document.encode("utf-8")
        commit_count = sum(v.commit_count for v in self.ctx.versions)

        total_ms = int((time.perf_counter() - pipeline_start) * 1000)
        logger.info(
            "[%s] Changelog complete — %d versions, %d commits, %dms",
            self.job_id, len(self.ctx.versions), commit_count, total_ms,
        )

        return JobResult(
            job_id=self.job_id,
            output_format=self.output_format,
            sort_order=self.sort_order,
            artifact=ArtifactMetadata(
                path=str(self.ctx.written_path) if self.ctx.written_path else None,
                size_bytes=len(encoded),
                content_hash=hashlib.sha256(encoded).hexdigest(),
            ),
            version_count=len(self.ctx.versions),
            commit_count=commit_count,
            timings=self.timings,
            warnings=self.ctx.warnings,
        )

    def collect_versions(self) -> list[Version]:
        """Compile, open and segment only. Returns versions in the requested order."""
        logger.info("[%s] Segment-only run starting (order=%s)", self.job_id, self.sort_order.value)
        try:
            self._step_compile_patterns()
            self._step_open_repository()
            self._step_segment()
            self.state = JobState.DELIVERED
        except Exception:
            self.state = JobState.FAILED
            raise
        return self.ctx.versions

    def _step_compile_patterns(self):
        t = time.perf_counter()
        try:
            self.ctx.commit_regex = compile_commit_pattern(self.commit_pattern)
            self.ctx.version_regex = compile_version_pattern(self.version_pattern)
        except Exception as exc:
            self._record_step("compile_patterns", t, "failed", str(exc))
            raise
        self.state = JobState.PATTERNS_COMPILED
        self._record_step("compile_patterns", t)

    def _step_open_repository(self):
        t = time.perf_counter()
        if self.ctx.provider is not None:
            self.state = JobState.REPOSITORY_OPENED
            self._record_step("open_repository", t, "skipped", "provider supplied")
            return

        from changeforge.repository.git_provider import GitPythonProvider

        try:
            self.ctx.provider = GitPythonProvider.open(self.repository)
        except Exception as exc:
            self._record_step("open_repository", t, "failed", str(exc))
            raise
        self.state = JobState.REPOSITORY_OPENED
        self._record_step("open_repository", t, detail=str(self.repository))

    def _step_segment(self):
        t = time.perf_counter()
        provider = self.ctx.provider
        try:
            with step_timer("Segment history"):
                tags = provider.list_tags(self.ctx.version_regex)
                tag_index, warnings = build_tag_index(tags)
                self.ctx.warnings.extend(warnings)
                versions = segment(iter_history(provider), tag_index, self.ctx.commit_regex)
        except Exception as exc:
            self._record_step("segment", t, "failed", str(exc))
            raise

        self.ctx.versions = apply_sort_order(versions, self.sort_order)
        self.state = JobState.SEGMENTED
        self._record_step("segment", t, detail=f"{len(versions)} versions, {len(tag_index)} release tags")

    def _step_render(self):
        t = time.perf_counter()
        self.ctx.document = render(self.ctx.versions, self.title, self.output_format)
        self.state = JobState.RENDERED
        self._record_step("render", t, detail=f"{self.output_format.value} → {len(self.ctx.document)} chars")

    def _step_write(self):
        t = time.perf_counter()
        if self.output_path is None:
            self._record_step("write", t, "skipped", "no output path")
            return
        try:
            self.ctx.written_path = write_document(self.ctx.document, self.output_path)
        except Exception as exc:
            self._record_step("write", t, "failed", str(exc))
            raise
        self.state = JobState.WRITTEN
        self._record_step("write", t, detail=str(self.ctx.written_path))


def generate_changelog(
    provider: RepositoryProvider,
    sort_order: SortOrder = SortOrder.NEWEST,
    commit_pattern: str | None = None,
    version_pattern: str | None = None,
) -> list[Version]:
    """Segment a provider's history without rendering. Returns versions in the requested order."""
    job = ChangelogJob(
        sort_order=sort_order,
        commit_pattern=commit_pattern,
        version_pattern=version_pattern,
        provider=provider,
    )
    return job.collect_versions()
