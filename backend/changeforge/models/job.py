"""
ChangeForge — Job result and pipeline output contracts.

Every changelog run returns a JobResult with full traceability:
timings, counts, the written artifact and its content hash.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field

from changeforge.models.changelog import OutputFormat, SortOrder


class JobState(str, enum.Enum):
    RECEIVED = "RECEIVED"
    PATTERNS_COMPILED = "PATTERNS_COMPILED"
    REPOSITORY_OPENED = "REPOSITORY_OPENED"
    SEGMENTED = "SEGMENTED"
    RENDERED = "RENDERED"
    WRITTEN = "WRITTEN"
    DELIVERED = "DELIVERED"
    FAILED = "FAILED"


class StepTiming(BaseModel):
    step: str
    duration_ms: int
    status: str = "ok"  # ok | skipped | failed
    detail: str = ""


class ArtifactMetadata(BaseModel):
    path: str | None = None  # None when the document was only rendered
    size_bytes: int
    content_hash: str = ""  # SHA-256 of the UTF-8 document


class JobResult(BaseModel):
    """Complete output contract for every changelog run."""

    job_id: str
    output_format: OutputFormat
    sort_order: SortOrder
    artifact: ArtifactMetadata
    version_count: int = 0
    commit_count: int = 0
    timings: list[StepTiming] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
