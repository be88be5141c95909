"""API route definitions for the repository stats service."""

import asyncio

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from models.stats import StatsRequest, StatsResponse
from services.stats_pipeline import analyze_repository
from utils.git_fetcher import GitRepositoryFetcher

router = APIRouter()

GREETING = "Hello, developer."


@router.get("/", response_class=PlainTextResponse)
async def health() -> str:
    """
    Lightweight endpoint for uptime checks.

    Returns:
        str: Fixed greeting.
    """
    return GREETING


@router.post("/stats", response_model=StatsResponse)
async def stats(payload: StatsRequest, request: Request) -> StatsResponse:
    """
    Clone a repository and return per-language line statistics.

    Request body:
        {
            "url": "https://github.com/user/repo"
        }

    Returns:
        StatsResponse: origin, languages sorted by lines, and total.

    Raises:
        PipelineError: Rendered as a plain-text 500 by the app's handler.
    """
    config = request.app.state.config
    fetcher = GitRepositoryFetcher(
        probe_timeout=config.probe_timeout,
        clone_timeout=config.clone_timeout,
    )

    # Clone and scan block; keep them off the event loop so requests overlap.
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(
        request.app.state.executor,
        lambda: analyze_repository(payload.url, fetcher=fetcher),
    )
