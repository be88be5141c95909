"""Aggregation of raw scanner output into the stats response shape."""

from typing import Mapping

from models.stats import LanguageStat
from utils.source_scanner import RawLanguageStat


def make_stat(raw: RawLanguageStat) -> LanguageStat:
    """Convert one raw scanner tally into a LanguageStat."""
    return LanguageStat.from_counts(
        files=raw.files,
        codes=raw.code,
        comments=raw.comments,
        blanks=raw.blanks,
    )


def sum_stats(stats: list[tuple[str, LanguageStat]]) -> LanguageStat:
    """Field-wise sum over all language stats."""
    return LanguageStat(
        files=sum(stat.files for _, stat in stats),
        lines=sum(stat.lines for _, stat in stats),
        codes=sum(stat.codes for _, stat in stats),
        comments=sum(stat.comments for _, stat in stats),
        blanks=sum(stat.blanks for _, stat in stats),
    )


def aggregate(
    languages: Mapping[str, RawLanguageStat],
) -> tuple[list[tuple[str, LanguageStat]], LanguageStat]:
    """
    Build the per-language list and the grand total.

    The list is sorted by ``lines`` descending. Python's sort is stable,
    so languages with equal ``lines`` keep the scanner's order.

    Returns:
        (stats, total). An empty mapping gives ([], all-zero total).
    """
    stats = [(name, make_stat(raw)) for name, raw in languages.items()]
    stats.sort(key=lambda item: item[1].lines, reverse=True)
    return stats, sum_stats(stats)
