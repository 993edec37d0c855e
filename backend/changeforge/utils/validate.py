"""
ChangeForge — Option validation for CLI and environment input.

Collects every problem before raising, so one ValidationError reports
all bad options at once.
"""

from pathlib import Path

from changeforge.errors import ValidationError
from changeforge.models.changelog import OutputFormat, SortOrder

EXTENSIONS = {
    OutputFormat.MARKDOWN: ".md",
    OutputFormat.HTML: ".html",
}


def validate_options(output_format: str, sort_order: str) -> tuple[OutputFormat, SortOrder]:
    """
    Parse format and sort order names (case-insensitive).
    Raises ValidationError listing every invalid value.
    """
    errors: list[str] = []
    fmt = order = None

    try:
        fmt = OutputFormat(str(output_format).strip().lower())
    except ValueError:
        errors.append(f"Unknown output format: '{output_format}'")

    try:
        order = SortOrder(str(sort_order).strip().lower())
    except ValueError:
        errors.append(f"Unknown sort order: '{sort_order}'")

    if errors:
        raise ValidationError(errors)

    return fmt, order


def normalize_output_path(path: str | Path, output_format: OutputFormat) -> Path:
    """Force the extension that matches the format: CHANGELOG.txt + html -> CHANGELOG.html."""
    path = Path(path)
    if not path.name:
        raise ValidationError(
            [f"Output path '{path}' does not name a file"],
            suggestion="Pass a file path such as CHANGELOG.md.",
        )
    expected = EXTENSIONS[OutputFormat(output_format)]
    if path.suffix != expected:
        path = path.with_suffix(expected)
    return path
