"""
ChangeForge — Markdown changelog renderer.
"""

from __future__ import annotations

from changeforge.models.changelog import Version
from changeforge.models.commit import ClassifiedCommit
from changeforge.render.sections import GENERATOR, INTRO_LINE, ordered_sections, version_heading


def _entry(commit: ClassifiedCommit) -> str:
    if commit.scope:
        return f"- **{commit.scope}**: {commit.message}"
    return f"- {commit.message}"


def render_markdown(versions: list[Version], title: str) -> str:
    lines: list[str] = [f"# {title}", "", INTRO_LINE, ""]

    for version in versions:
        lines.append(f"## {version_heading(version)}")
        lines.append("")
        for section, commits in ordered_sections(version):
            lines.append(f"### {section.label}")
            lines.append("")
            lines.extend(_entry(c) for c in commits)
            lines.append("")

    lines.append(f"<!-- generated by {GENERATOR} -->")
    return "\n".join(lines) + "\n"
