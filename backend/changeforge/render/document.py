"""
ChangeForge — Document assembly and output.

render() picks the markup variant; write_document() puts the finished text
on disk atomically, so a failed run never leaves a half-written changelog.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from changeforge.errors import RenderIoError
from changeforge.models.changelog import OutputFormat, Version
from changeforge.render.html import render_html
from changeforge.render.markdown import render_markdown
from changeforge.utils.logging import logger, step_timer

RENDERERS = {
    OutputFormat.MARKDOWN: render_markdown,
    OutputFormat.HTML: render_html,
}


def render(versions: list[Version], title: str, output_format: OutputFormat) -> str:
    return RENDERERS[OutputFormat(output_format)](versions, title)


def write_document(text: str, path: str | Path) -> Path:
    """Write text as UTF-8 to path via a temporary sibling file and an atomic rename."""
    target = Path(path)
    with step_timer("Write changelog"):
        tmp_name: str | None = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
                fh.write(text)
            os.chmod(tmp_name, 0o644)  # mkstemp creates 0600
            os.replace(tmp_name, target)
            tmp_name = None
        except OSError as exc:
            raise RenderIoError(str(target), exc.strerror or str(exc))
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

        logger.info("  Wrote %s (%d bytes)", target, len(text.encode("utf-8")))
    return target
