"""
ChangeForge — Structured error catalog.

Every error has a code, human message, and suggested fix.
No raw GitPython or OS exceptions leak to the CLI or the API.
"""

from __future__ import annotations

from typing import Any


class ChangeForgeError(Exception):
    """Base error with structured code + suggestion."""

    def __init__(self, code: str, message: str, suggestion: str = "", detail: Any = None):
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.detail = detail
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "error_code": self.code,
            "message": self.message,
        }
        if self.suggestion:
            d["suggestion"] = self.suggestion
        if self.detail:
            d["detail"] = self.detail
        return d


class ValidationError(ChangeForgeError):
    def __init__(self, errors: list[str], suggestion: str = ""):
        self.errors = errors
        super().__init__(
            code="VALIDATION_FAILED",
            message=f"Invalid options: {'; '.join(errors)}",
            suggestion=suggestion or "Use format 'markdown' or 'html' and sort order 'newest' or 'oldest'.",
            detail=errors,
        )


class RepositoryAccessError(ChangeForgeError):
    def __init__(self, message: str, detail: Any = None, code: str = "REPOSITORY_ACCESS_FAILED", suggestion: str = ""):
        super().__init__(
            code=code,
            message=message,
            suggestion=suggestion or "Check that the path is a git repository with at least one commit.",
            detail=detail,
        )


class RepositoryNotFoundError(RepositoryAccessError):
    def __init__(self, path: str):
        super().__init__(
            message=f"Repository path does not exist: {path}",
            code="REPOSITORY_NOT_FOUND",
            suggestion="Pass the repository root with --repository.",
        )


class CommitNotFoundError(RepositoryAccessError):
    def __init__(self, commit_id: str):
        super().__init__(
            message=f"Commit not found: {commit_id}",
            code="COMMIT_NOT_FOUND",
            suggestion="The commit list and the object store disagree; re-run against a consistent repository.",
        )


class PatternCompilationError(ChangeForgeError):
    def __init__(self, kind: str, pattern: str, reason: str):
        super().__init__(
            code="PATTERN_COMPILE_FAILED",
            message=f"Invalid {kind} pattern {pattern!r}: {reason}",
            suggestion=(
                "Commit patterns need named groups 'type' and 'message' (and may define 'scope'). "
                "Version patterns only need to compile."
            ),
            detail={"kind": kind, "pattern": pattern},
        )


class RenderIoError(ChangeForgeError):
    def __init__(self, path: str, reason: str):
        super().__init__(
            code="RENDER_IO_FAILED",
            message=f"Could not write changelog to {path}: {reason}",
            suggestion="Check that the output directory is writable.",
        )
