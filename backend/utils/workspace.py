"""Ephemeral workspace directories for repository analysis.

Each pipeline run owns exactly one workspace: a fresh, uniquely named
temporary directory that is removed when the run ends, whatever the
outcome. Use the ``workspace()`` context manager rather than pairing
``acquire``/``release`` by hand.
"""

import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from typing import Iterator, Optional

from services.pipeline_errors import IoFailure, WorkspaceFailure

logger = logging.getLogger(__name__)

WORKSPACE_PREFIX = "repo-stats-"


def acquire(base_dir: Optional[str] = None) -> str:
    """
    Create a new empty directory at a system-chosen unique path.

    Args:
        base_dir: Parent directory; defaults to the system temp directory.

    Returns:
        Absolute path of the new directory.

    Raises:
        WorkspaceFailure: If the directory cannot be created or its path
            cannot be passed to external tools as text.
    """
    try:
        path = tempfile.mkdtemp(prefix=WORKSPACE_PREFIX, dir=base_dir)
    except OSError as exc:
        message = "Failed to make a temporary directory"
        logger.warning("%s: %s", message, exc)
        raise WorkspaceFailure(message) from exc

    try:
        path.encode("utf-8")
    except UnicodeEncodeError as exc:
        shutil.rmtree(path, ignore_errors=True)
        message = "Failed to make a temporary directory"
        logger.warning("%s: path %r is not valid text", message, path)
        raise WorkspaceFailure(message) from exc

    logger.info("Workspace ready: %s", path)
    return path


def release(path: str) -> None:
    """
    Recursively delete ``path``.

    Deleting a path that no longer exists is not an error.

    Raises:
        IoFailure: If the tree cannot be removed.
    """
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        message = f"Failed to delete temporary directory: {exc}"
        logger.warning(message)
        raise IoFailure(message) from exc

    if os.path.exists(path):
        message = "Temporary directory still exists after deletion"
        logger.warning("%s: %s", message, path)
        raise IoFailure(message)
    logger.info("Deleted temporary directory: %s", path)


@contextmanager
def workspace(base_dir: Optional[str] = None) -> Iterator[str]:
    """
    Acquire a workspace and release it exactly once on exit.

    If the body raised, a failure during cleanup is logged and the
    original error propagates.
    """
    path = acquire(base_dir)
    try:
        yield path
    except BaseException:
        try:
            release(path)
        except IoFailure as exc:
            logger.warning("Cleanup after a failed run also failed: %s", exc)
        raise
    release(path)
