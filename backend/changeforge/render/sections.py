"""
ChangeForge — Section registry.

One entry per commit category: its display label and its fixed position in
the rendered document. Grouping never looks at this table; only renderers do.
"""

from __future__ import annotations

from pydantic import BaseModel

from changeforge.models.changelog import Version
from changeforge.models.commit import ClassifiedCommit, CommitCategory

INTRO_LINE = "All notable changes to this project will be documented in this file."
GENERATOR = "changeforge"


class SectionEntry(BaseModel):
    category: CommitCategory
    label: str
    position: int


SECTIONS: dict[CommitCategory, SectionEntry] = {
    entry.category: entry
    for entry in (
        SectionEntry(category=CommitCategory.FEATURE, label="Features", position=0),
        SectionEntry(category=CommitCategory.BUG_FIX, label="Bug Fixes", position=1),
        SectionEntry(category=CommitCategory.DOCUMENTATION, label="Documentation", position=2),
        SectionEntry(category=CommitCategory.STYLE, label="Styling", position=3),
        SectionEntry(category=CommitCategory.REFACTOR, label="Refactor", position=4),
        SectionEntry(category=CommitCategory.PERFORMANCE, label="Performance", position=5),
        SectionEntry(category=CommitCategory.TESTING, label="Testing", position=6),
        SectionEntry(category=CommitCategory.BUILD, label="Build", position=7),
        SectionEntry(category=CommitCategory.CI, label="Continuous Integration", position=8),
        SectionEntry(category=CommitCategory.CHORE, label="Chore", position=9),
        SectionEntry(category=CommitCategory.OTHER, label="Miscellaneous Tasks", position=10),
    )
}


def get_section(category: CommitCategory) -> SectionEntry:
    return SECTIONS[category]


def list_sections() -> list[SectionEntry]:
    return sorted(SECTIONS.values(), key=lambda s: s.position)


def ordered_sections(version: Version) -> list[tuple[SectionEntry, list[ClassifiedCommit]]]:
    """Non-empty buckets of a version in display order."""
    return [
        (section, version.commits_by_category[section.category])
        for section in list_sections()
        if version.commits_by_category.get(section.category)
    ]


def version_heading(version: Version) -> str:
    """'[unreleased]', '[v1.2.0] - 2025-01-02' or '[v1.2.0]' for undated tags."""
    if version.is_unreleased:
        return f"[{version.name}]"
    if version.date is not None:
        return f"[{version.name}] - {version.date.strftime('%Y-%m-%d')}"
    return f"[{version.name}]"
