"""
ChangeForge CLI — generate a changelog from git history.

  changeforge -r path/to/repo -o CHANGELOG.md -f markdown -s newest

Defaults come from CHANGEFORGE_* environment variables (or .env).
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from changeforge.core.config import AppConfig, load_config
from changeforge.errors import ChangeForgeError
from changeforge.models.changelog import OutputFormat, SortOrder
from changeforge.pipeline.orchestrator import ChangelogJob
from changeforge.utils import logging as log_setup
from changeforge.utils.validate import normalize_output_path


def build_parser(cfg: AppConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="changeforge",
        description="Generate a changelog from git commit history",
    )
    parser.add_argument("-r", "--repository", default=cfg.repository, help="Path to the git repository")
    parser.add_argument("-o", "--output", default=cfg.output, help="Output file path for the changelog")
    parser.add_argument("-t", "--title", default=cfg.title, help="Title for the changelog")
    parser.add_argument(
        "-f", "--format",
        choices=[f.value for f in OutputFormat],
        default=cfg.output_format.value,
        help="Format for the changelog",
    )
    parser.add_argument(
        "-s", "--sort-order",
        choices=[s.value for s in SortOrder],
        default=cfg.sort_order.value,
        help="List the newest or the oldest version first",
    )
    parser.add_argument("--commit-pattern", default=cfg.commit_pattern,
                        help="Regex with named groups type, message and optional scope")
    parser.add_argument("--version-pattern", default=cfg.version_pattern,
                        help="Regex a tag name must match to count as a release")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log debug details")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    return parser


def cmd_generate(args: argparse.Namespace) -> None:
    output_format = OutputFormat(args.format)
    output = normalize_output_path(args.output, output_format)

    job = ChangelogJob(
        repository=args.repository,
        output_path=output,
        title=args.title,
        output_format=output_format,
        sort_order=SortOrder(args.sort_order),
        commit_pattern=args.commit_pattern,
        version_pattern=args.version_pattern,
    )
    result = job.run()
    print(f"Changelog generated at: {result.artifact.path}")


def _report(exc: ChangeForgeError) -> None:
    print(f"error [{exc.code}]: {exc.message}", file=sys.stderr)
    if exc.suggestion:
        print(f"  hint: {exc.suggestion}", file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    try:
        cfg = load_config()
    except ChangeForgeError as exc:
        _report(exc)
        return 1

    args = build_parser(cfg).parse_args(argv)

    if args.verbose:
        log_setup.set_level("DEBUG")
    elif args.quiet:
        log_setup.set_level("WARNING")
    else:
        log_setup.set_level(cfg.log_level)

    try:
        cmd_generate(args)
    except ChangeForgeError as exc:
        _report(exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
