"""Tests for aggregation of scanner output into stats and totals."""

from models.stats import LanguageStat
from services.stats_aggregator import aggregate, make_stat, sum_stats
from utils.source_scanner import RawLanguageStat


def test_make_stat_derives_lines():
    stat = make_stat(RawLanguageStat(code=10, comments=4, blanks=3, files=2))

    assert stat == LanguageStat(files=2, lines=17, codes=10, comments=4, blanks=3)


def test_aggregate_empty_scan_gives_zero_total():
    stats, total = aggregate({})

    assert stats == []
    assert total == LanguageStat(files=0, lines=0, codes=0, comments=0, blanks=0)


def test_aggregate_sorts_by_lines_descending():
    raw = {
        "CSS": RawLanguageStat(code=5, comments=0, blanks=1, files=1),
        "Python": RawLanguageStat(code=100, comments=20, blanks=10, files=4),
        "Rust": RawLanguageStat(code=40, comments=5, blanks=5, files=2),
    }

    stats, _ = aggregate(raw)

    assert [name for name, _ in stats] == ["Python", "Rust", "CSS"]
    lines = [stat.lines for _, stat in stats]
    assert lines == sorted(lines, reverse=True)


def test_aggregate_keeps_scanner_order_for_equal_lines():
    raw = {
        "Zig": RawLanguageStat(code=3, comments=0, blanks=0, files=1),
        "Go": RawLanguageStat(code=1, comments=1, blanks=1, files=1),
        "Ada": RawLanguageStat(code=10, comments=0, blanks=0, files=1),
        "C": RawLanguageStat(code=2, comments=0, blanks=1, files=1),
    }

    stats, _ = aggregate(raw)

    assert [name for name, _ in stats] == ["Ada", "Zig", "Go", "C"]


def test_aggregate_total_is_field_wise_sum():
    raw = {
        "Python": RawLanguageStat(code=100, comments=20, blanks=10, files=4),
        "Rust": RawLanguageStat(code=40, comments=5, blanks=5, files=2),
    }

    stats, total = aggregate(raw)

    for field in ("files", "lines", "codes", "comments", "blanks"):
        assert getattr(total, field) == sum(getattr(stat, field) for _, stat in stats)
    assert total.lines == total.codes + total.comments + total.blanks
    assert total == LanguageStat(files=6, lines=180, codes=140, comments=25, blanks=15)


def test_every_language_lines_equals_sum_of_counters():
    raw = {
        "Python": RawLanguageStat(code=7, comments=2, blanks=1, files=1),
        "Markdown": RawLanguageStat(code=0, comments=12, blanks=4, files=3),
    }

    stats, _ = aggregate(raw)

    for _, stat in stats:
        assert stat.lines == stat.codes + stat.comments + stat.blanks


def test_sum_stats_of_nothing_is_zero():
    assert sum_stats([]) == LanguageStat()
