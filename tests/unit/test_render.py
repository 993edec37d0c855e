"""Unit tests for changelog rendering and document output."""

import os
from datetime import datetime, timezone

import pytest

from changeforge.errors import RenderIoError
from changeforge.models.changelog import UNRELEASED, OutputFormat, Version
from changeforge.models.commit import ClassifiedCommit, CommitCategory
from changeforge.render.document import render, write_document
from changeforge.render.html import render_html
from changeforge.render.markdown import render_markdown
from changeforge.render.sections import (
    SECTIONS,
    get_section,
    list_sections,
    ordered_sections,
    version_heading,
)

WHEN = datetime(2025, 3, 9, 15, 30, tzinfo=timezone.utc)


def _commit(cid, category, message, scope=None):
    return ClassifiedCommit(id=cid, category=category, scope=scope, message=message, timestamp=WHEN)


@pytest.fixture
def versions():
    # Buckets deliberately inserted out of display order.
    unreleased = Version(
        name=UNRELEASED,
        is_unreleased=True,
        commits_by_category={
            CommitCategory.OTHER: [_commit("c5", CommitCategory.OTHER, "tidy up")],
            CommitCategory.BUG_FIX: [_commit("c4", CommitCategory.BUG_FIX, "stop crash", scope="ui")],
            CommitCategory.FEATURE: [_commit("c3", CommitCategory.FEATURE, "dark mode")],
        },
    )
    release = Version(
        name="v1.0.0",
        date=WHEN,
        commits_by_category={
            CommitCategory.CHORE: [_commit("c2", CommitCategory.CHORE, "bump deps")],
            CommitCategory.FEATURE: [_commit("c1", CommitCategory.FEATURE, "first", scope="core")],
        },
    )
    return [unreleased, release]


class TestSections:
    def test_one_entry_per_category(self):
        assert set(SECTIONS) == set(CommitCategory)
        labels = [s.label for s in list_sections()]
        assert len(labels) == len(set(labels))

    def test_fixed_order(self):
        assert [s.category for s in list_sections()] == [
            CommitCategory.FEATURE, CommitCategory.BUG_FIX, CommitCategory.DOCUMENTATION,
            CommitCategory.STYLE, CommitCategory.REFACTOR, CommitCategory.PERFORMANCE,
            CommitCategory.TESTING, CommitCategory.BUILD, CommitCategory.CI,
            CommitCategory.CHORE, CommitCategory.OTHER,
        ]

    def test_ordered_sections_skip_empty_buckets(self):
        v = Version(
            name="v1.0.0",
            commits_by_category={
                CommitCategory.TESTING: [],
                CommitCategory.CI: [_commit("c1", CommitCategory.CI, "cache pip")],
            },
        )
        assert [s.category for s, _ in ordered_sections(v)] == [CommitCategory.CI]

    def test_headings(self):
        assert version_heading(Version(name=UNRELEASED, is_unreleased=True)) == "[unreleased]"
        assert version_heading(Version(name="v1.2.0", date=WHEN)) == "[v1.2.0] - 2025-03-09"
        assert version_heading(Version(name="v1.2.0")) == "[v1.2.0]"

    def test_get_section(self):
        assert get_section(CommitCategory.BUG_FIX).label == "Bug Fixes"


class TestMarkdown:
    def test_document_shape(self, versions):
        md = render_markdown(versions, "My Changelog")
        assert md.startswith("# My Changelog\n\nAll notable changes")
        assert "## [unreleased]\n" in md
        assert "## [v1.0.0] - 2025-03-09\n" in md
        assert md.rstrip().endswith("<!-- generated by changeforge -->")

    def test_category_order_ignores_insertion_order(self, versions):
        md = render_markdown(versions, "T")
        unreleased_part = md.split("## [v1.0.0]")[0]
        assert unreleased_part.index("### Features") < unreleased_part.index("### Bug Fixes")
        assert unreleased_part.index("### Bug Fixes") < unreleased_part.index("### Miscellaneous Tasks")

    def test_scope_is_bold(self, versions):
        md = render_markdown(versions, "T")
        assert "- **ui**: stop crash" in md
        assert "- dark mode" in md

    def test_version_order_is_preserved(self, versions):
        md = render_markdown(list(reversed(versions)), "T")
        assert md.index("## [v1.0.0]") < md.index("## [unreleased]")

    def test_empty_changelog(self):
        md = render_markdown([], "Empty")
        assert "# Empty" in md
        assert "##" not in md


class TestHtml:
    def test_page_skeleton(self, versions):
        page = render_html(versions, "My Changelog")
        assert page.startswith("<!DOCTYPE html>")
        assert "<style>" in page
        assert "<title>My Changelog</title>" in page
        assert "<h2>[unreleased]</h2>" in page
        assert "<h2>[v1.0.0] - 2025-03-09</h2>" in page
        assert "Generated by changeforge" in page
        assert page.rstrip().endswith("</html>")

    def test_scope_is_strong(self, versions):
        page = render_html(versions, "T")
        assert "<li><strong>ui</strong>: stop crash</li>" in page
        assert "<li>dark mode</li>" in page

    def test_escapes_repository_text(self):
        v = Version(
            name="v1.0.0",
            commits_by_category={
                CommitCategory.FEATURE: [_commit("c1", CommitCategory.FEATURE, "support <T> & co", scope="a<b")],
            },
        )
        page = render_html([v], "R&D <log>")
        assert "support &lt;T&gt; &amp; co" in page
        assert "<strong>a&lt;b</strong>" in page
        assert "<title>R&amp;D &lt;log&gt;</title>" in page

    def test_same_grouping_as_markdown(self, versions):
        page = render_html(versions, "T")
        md = render_markdown(versions, "T")
        labels = [s.label for s in list_sections()]
        assert [l for l in labels if f"<h3>{l}</h3>" in page] == [l for l in labels if f"### {l}" in md]


class TestRenderDispatch:
    def test_markdown(self, versions):
        assert render(versions, "T", OutputFormat.MARKDOWN) == render_markdown(versions, "T")

    def test_html_by_value(self, versions):
        assert render(versions, "T", "html") == render_html(versions, "T")


class TestWriteDocument:
    def test_writes_utf8(self, tmp_path):
        target = write_document("# Änderungen\n", tmp_path / "CHANGELOG.md")
        assert target.read_text(encoding="utf-8") == "# Änderungen\n"

    def test_creates_parent_directories(self, tmp_path):
        target = write_document("x\n", tmp_path / "docs" / "nested" / "CHANGELOG.md")
        assert target.exists()

    def test_replaces_existing_and_leaves_no_temp_files(self, tmp_path):
        target = tmp_path / "CHANGELOG.md"
        target.write_text("old", encoding="utf-8")
        write_document("new\n", target)
        assert target.read_text(encoding="utf-8") == "new\n"
        assert sorted(os.listdir(tmp_path)) == ["CHANGELOG.md"]

    def test_unwritable_destination(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory", encoding="utf-8")
        with pytest.raises(RenderIoError) as exc_info:
            write_document("x", blocker / "CHANGELOG.md")
        assert exc_info.value.code == "RENDER_IO_FAILED"
