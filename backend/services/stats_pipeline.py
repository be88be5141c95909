"""Clone-analyze-aggregate pipeline for a single stats request.

Steps, in order:
1. Acquire a fresh workspace directory.
2. Fetch the repository into it (probe, shallow clone, verify).
3. Scan the checkout for per-language line counts.
4. Aggregate the counts into a StatsResponse.

The workspace is removed when the pipeline leaves, on success and on
every failure path. The first PipelineError raised aborts the remaining
steps and propagates to the caller unchanged; nothing is retried.
"""

import logging
from typing import Callable, Mapping, Optional

from models.stats import StatsResponse
from services.pipeline_errors import IoFailure, PipelineError
from services.stats_aggregator import aggregate
from utils.git_fetcher import GitRepositoryFetcher, RepositoryFetcher
from utils.source_scanner import RawLanguageStat, scan
from utils.workspace import workspace

logger = logging.getLogger(__name__)

Scanner = Callable[[str], Mapping[str, RawLanguageStat]]


def _scan_workspace(scanner: Scanner, path: str) -> Mapping[str, RawLanguageStat]:
    try:
        return scanner(path)
    except PipelineError:
        raise
    except Exception as exc:
        message = f"Failed to scan repository: {exc}"
        logger.warning(message)
        raise IoFailure(message) from exc


def analyze_repository(
    url: str,
    *,
    fetcher: Optional[RepositoryFetcher] = None,
    scanner: Scanner = scan,
    workspace_dir: Optional[str] = None,
) -> StatsResponse:
    """
    Clone ``url`` into a temporary workspace and return its line statistics.

    Args:
        url: Git repository URL; echoed back as ``origin``.
        fetcher: Populates the workspace; defaults to GitRepositoryFetcher().
        scanner: Returns per-language counts for a directory.
        workspace_dir: Parent directory for the workspace (system temp if None).

    Returns:
        StatsResponse with languages sorted by line count.

    Raises:
        WorkspaceFailure, FetchFailure, CloneFailure, IoFailure: First failure hit.
    """
    logger.info("Target is: %s", url)
    if fetcher is None:
        fetcher = GitRepositoryFetcher()

    with workspace(workspace_dir) as path:
        fetcher.fetch(url, path)
        languages = _scan_workspace(scanner, path)
        stats, total = aggregate(languages)

    logger.info("Analysed %s: %d languages, %d lines", url, len(stats), total.lines)
    return StatsResponse(origin=url, stats=stats, total=total)
