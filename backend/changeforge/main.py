"""
ChangeForge — FastAPI Backend

Endpoints:
  POST /v1/changelog  — Local repository → rendered changelog (Markdown or HTML)
  GET  /v1/sections   — Category sections in display order
  GET  /health        — Health check
"""

import time
import uuid

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, Field

from changeforge.errors import ChangeForgeError
from changeforge.models.changelog import OutputFormat, SortOrder
from changeforge.pipeline.orchestrator import ChangelogJob
from changeforge.render.sections import list_sections
from changeforge.utils.logging import logger

API_VERSION = "1.0.0"

MEDIA_TYPES = {
    OutputFormat.MARKDOWN: "text/markdown; charset=utf-8",
    OutputFormat.HTML: "text/html; charset=utf-8",
}

app = FastAPI(
    title="ChangeForge API",
    description="Render grouped changelogs from the commit history of local git repositories.",
    version=API_VERSION,
)


# ──────────────────────────────────────────────────────────
# Request models
# ──────────────────────────────────────────────────────────

class ChangelogRequest(BaseModel):
    repository: str = Field(..., description="Path to a local git repository")
    title: str = Field(default="Changelog", description="Document title")
    format: OutputFormat = Field(default=OutputFormat.MARKDOWN, description="markdown | html")
    sort_order: SortOrder = Field(default=SortOrder.NEWEST, description="newest | oldest")
    commit_pattern: str | None = Field(
        default=None,
        description="Regex with named groups type, message and optional scope",
    )
    version_pattern: str | None = Field(
        default=None,
        description="Regex a tag name must match to count as a release",
    )


# ──────────────────────────────────────────────────────────
# Endpoints
# ──────────────────────────────────────────────────────────

@app.get("/health")
async def health():
    return {"status": "ok", "service": "changeforge-api", "version": API_VERSION}


@app.get("/v1/sections")
async def get_sections():
    """List changelog sections in the order they are rendered."""
    return [s.model_dump() for s in list_sections()]


@app.post(
    "/v1/changelog",
    response_class=Response,
    responses={
        200: {"content": {"text/markdown": {}, "text/html": {}}, "description": "Rendered changelog"},
        422: {"description": "Invalid options, pattern, or repository"},
        500: {"description": "Pipeline error"},
    },
)
def generate_changelog(req: ChangelogRequest):
    """
    Walk the repository's history and return the rendered changelog.

    Nothing is written to disk; the document is built in memory and
    returned as the response body.
    """
    request_id = uuid.uuid4().hex[:12]
    start = time.perf_counter()
    logger.info(
        "[%s] POST /v1/changelog — %s | format=%s order=%s",
        request_id, req.repository, req.format.value, req.sort_order.value,
    )

    try:
        job = ChangelogJob(
            repository=req.repository,
            title=req.title,
            output_format=req.format,
            sort_order=req.sort_order,
            commit_pattern=req.commit_pattern,
            version_pattern=req.version_pattern,
        )
        result = job.run()
    except ChangeForgeError as exc:
        logger.warning("[%s] ChangeForge error: %s", request_id, exc.code)
        raise HTTPException(status_code=422, detail=exc.to_dict())
    except Exception as exc:
        logger.exception("[%s] Pipeline failed", request_id)
        raise HTTPException(status_code=500, detail=str(exc))

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info("[%s] Complete — %d bytes in %.0f ms", request_id, result.artifact.size_bytes, elapsed_ms)

    return Response(
        content=job.ctx.document,
        media_type=MEDIA_TYPES[req.format],
        headers={
            "X-Request-Id": request_id,
            "X-Pipeline-Duration-Ms": f"{elapsed_ms:.0f}",
            "X-ChangeForge-Versions": str(result.version_count),
        },
    )
