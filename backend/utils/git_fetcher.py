"""Repository fetching for the stats pipeline.

A fetch is three steps: probe the URL over HTTP, shallow-clone it into
the workspace with git, and check that a ``.git`` directory was
produced. Any failing step aborts the fetch; the caller owns cleanup of
the destination directory.
"""

import logging
import os
import re
from pathlib import Path
from typing import Optional, Protocol

# Defer "git not installed" to clone time so it maps to CloneFailure.
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")

import httpx
from git import GitCommandError, GitCommandNotFound
from git.cmd import Git

from services.pipeline_errors import CloneFailure, FetchFailure

logger = logging.getLogger(__name__)

GIT_MARKER_DIR = ".git"
DEFAULT_PROBE_TIMEOUT = 10.0
DEFAULT_CLONE_TIMEOUT = 300.0


class RepositoryFetcher(Protocol):
    """Anything that can populate a directory with a repository."""

    def fetch(self, url: str, destination: str) -> None:
        ...


def _sanitize_remote(url: str) -> str:
    """Mask credentials embedded in a URL before logging it."""
    return re.sub(r"://[^/@]+@", "://***@", url)


class GitRepositoryFetcher:
    """Fetch repositories with an HTTP probe followed by ``git clone --depth 1``."""

    def __init__(
        self,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
        clone_timeout: Optional[float] = DEFAULT_CLONE_TIMEOUT,
    ):
        self.probe_timeout = probe_timeout
        self.clone_timeout = clone_timeout

    def fetch(self, url: str, destination: str) -> None:
        """
        Probe, clone and verify ``url`` into ``destination``.

        Raises:
            FetchFailure: If the probe cannot connect or gets a non-2xx status.
            CloneFailure: If git fails or no repository was produced.
        """
        self.probe(url)
        self.clone(url, destination)
        self.verify(destination)

    def probe(self, url: str) -> None:
        """Check that ``url`` answers a GET with a success status.

        Only the status line and headers are awaited; the body is never read.
        """
        try:
            with httpx.stream(
                "GET", url, follow_redirects=True, timeout=self.probe_timeout
            ) as response:
                status_code = response.status_code
                ok = response.is_success
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            message = "URL seems invalid"
            logger.warning("%s: %s (%s)", message, _sanitize_remote(url), exc)
            raise FetchFailure(message) from exc

        if not ok:
            message = "GET request failed"
            logger.warning("%s: %s returned %s", message, _sanitize_remote(url), status_code)
            raise FetchFailure(message)

    def clone(self, url: str, destination: str) -> None:
        """Shallow-clone ``url`` into ``destination`` without prompting."""
        kwargs = {"env": {"GIT_TERMINAL_PROMPT": "0"}}
        if self.clone_timeout:
            kwargs["kill_after_timeout"] = self.clone_timeout

        try:
            Git().clone("--depth", "1", "--quiet", "--", url, destination, **kwargs)
        except (GitCommandError, GitCommandNotFound) as exc:
            message = "Failed to git clone"
            logger.warning("%s: %s (%s)", message, _sanitize_remote(url), exc)
            raise CloneFailure(message) from exc
        logger.info("git clone finished: %s", _sanitize_remote(url))

    def verify(self, destination: str) -> None:
        """Ensure the clone left a repository behind."""
        if not (Path(destination) / GIT_MARKER_DIR).is_dir():
            message = ".git directory not found"
            logger.warning("%s in %s", message, destination)
            raise CloneFailure(message)
