"""
ChangeForge — Configuration
Loads .env from the working directory, then reads all settings from
environment variables. Command-line flags override these values.
"""

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from changeforge.models.changelog import OutputFormat, SortOrder
from changeforge.utils.validate import validate_options

load_dotenv(find_dotenv(usecwd=True))


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""
    repository: str
    output: str
    title: str
    output_format: OutputFormat
    sort_order: SortOrder
    commit_pattern: str | None
    version_pattern: str | None
    log_level: str


def _optional(name: str) -> str | None:
    value = os.getenv(name, "").strip()
    return value or None


def load_config() -> AppConfig:
    """Read CHANGEFORGE_* variables. Raises ValidationError on bad format/sort values."""
    output_format, sort_order = validate_options(
        os.getenv("CHANGEFORGE_FORMAT", "markdown"),
        os.getenv("CHANGEFORGE_SORT_ORDER", "newest"),
    )
    return AppConfig(
        repository=os.getenv("CHANGEFORGE_REPOSITORY", "."),
        output=os.getenv("CHANGEFORGE_OUTPUT", "CHANGELOG.md"),
        title=os.getenv("CHANGEFORGE_TITLE", "Changelog"),
        output_format=output_format,
        sort_order=sort_order,
        commit_pattern=_optional("CHANGEFORGE_COMMIT_PATTERN"),
        version_pattern=_optional("CHANGEFORGE_VERSION_PATTERN"),
        log_level=os.getenv("CHANGEFORGE_LOG_LEVEL", "INFO"),
    )
