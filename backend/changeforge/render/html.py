"""
ChangeForge — HTML changelog renderer.

Produces a single self-contained page: inline styles, no external assets.
All repository text is escaped before it is interpolated.
"""

from __future__ import annotations

import html

from changeforge.models.changelog import Version
from changeforge.models.commit import ClassifiedCommit
from changeforge.render.sections import GENERATOR, INTRO_LINE, ordered_sections, version_heading

STYLE = """\
      body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Helvetica, Arial, sans-serif; line-height: 1.5; max-width: 800px; margin: 0 auto; padding: 20px; color: #24292e; }
      h1 { border-bottom: 1px solid #eaecef; padding-bottom: 0.3em; }
      h2 { margin-top: 24px; margin-bottom: 16px; font-weight: 600; border-bottom: 1px solid #eaecef; padding-bottom: 0.3em; }
      h3 { margin-top: 24px; margin-bottom: 16px; font-weight: 600; }
      ul { padding-left: 2em; }
      li { margin: 0.25em 0; }
      .footer { margin-top: 30px; color: #6a737d; font-size: 0.9em; text-align: center; }"""


def _entry(commit: ClassifiedCommit) -> str:
    message = html.escape(commit.message)
    if commit.scope:
        return f"      <li><strong>{html.escape(commit.scope)}</strong>: {message}</li>"
    return f"      <li>{message}</li>"


def render_html(versions: list[Version], title: str) -> str:
    safe_title = html.escape(title)
    parts: list[str] = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "  <head>",
        '    <meta charset="utf-8" />',
        f"    <title>{safe_title}</title>",
        "    <style>",
        STYLE,
        "    </style>",
        "  </head>",
        "  <body>",
        f"    <h1>{safe_title}</h1>",
        f"    <p>{INTRO_LINE}</p>",
    ]

    for version in versions:
        parts.append(f"    <h2>{html.escape(version_heading(version))}</h2>")
        for section, commits in ordered_sections(version):
            parts.append(f"    <h3>{html.escape(section.label)}</h3>")
            parts.append("    <ul>")
            parts.extend(_entry(c) for c in commits)
            parts.append("    </ul>")

    parts.extend([
        f'    <div class="footer">Generated by {GENERATOR}</div>',
        "  </body>",
        "</html>",
    ])
    return "\n".join(parts) + "\n"
