"""Per-language line counting over a directory tree.

Language detection and line classification are delegated to pygount.
The scanner only walks the tree, skips repository metadata, and folds
per-file results into per-language tallies.
"""

import logging
import os
from dataclasses import dataclass

from pygount.analysis import SourceAnalysis, SourceState

from services.pipeline_errors import IoFailure

logger = logging.getLogger(__name__)

SKIPPED_DIRS = {".git"}
SCAN_GROUP = "workspace"


@dataclass
class RawLanguageStat:
    """Counts accumulated for one language during a scan."""

    code: int = 0
    comments: int = 0
    blanks: int = 0
    files: int = 0


def _iter_source_files(root: str):
    def _raise(exc: OSError) -> None:
        raise exc

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames[:] = sorted(d for d in dirnames if d not in SKIPPED_DIRS)
        for name in sorted(filenames):
            path = os.path.join(dirpath, name)
            # Links may point outside the workspace.
            if os.path.islink(path):
                continue
            yield path


def scan(directory: str) -> dict[str, RawLanguageStat]:
    """
    Count code, comment and blank lines per language under ``directory``.

    Only files pygount could analyse contribute; binary, empty, generated
    and unknown files are ignored.

    Returns:
        Mapping of language name to RawLanguageStat, ordered by language
        name (case-insensitive). Empty if no source files were found.

    Raises:
        IoFailure: If the tree cannot be walked.
    """
    languages: dict[str, RawLanguageStat] = {}
    try:
        for path in _iter_source_files(directory):
            analysis = SourceAnalysis.from_file(path, SCAN_GROUP)
            if analysis.state != SourceState.analyzed:
                continue
            stat = languages.setdefault(analysis.language, RawLanguageStat())
            stat.code += analysis.code_count + analysis.string_count
            stat.comments += analysis.documentation_count
            stat.blanks += analysis.empty_count
            stat.files += 1
    except OSError as exc:
        message = f"Failed to scan directory: {exc}"
        logger.warning(message)
        raise IoFailure(message) from exc

    return {name: languages[name] for name in sorted(languages, key=str.lower)}
