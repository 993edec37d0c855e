"""ChangeForge data models — typed contracts for the entire pipeline."""

from changeforge.models.commit import (
    CommitCategory,
    CommitRecord,
    TagRecord,
    ClassifiedCommit,
)
from changeforge.models.changelog import (
    UNRELEASED,
    OutputFormat,
    SortOrder,
    Version,
)
from changeforge.models.job import (
    JobState,
    StepTiming,
    ArtifactMetadata,
    JobResult,
)

__all__ = [
    "CommitCategory",
    "CommitRecord",
    "TagRecord",
    "ClassifiedCommit",
    "UNRELEASED",
    "OutputFormat",
    "SortOrder",
    "Version",
    "JobState",
    "StepTiming",
    "ArtifactMetadata",
    "JobResult",
]
