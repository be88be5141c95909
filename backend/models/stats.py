"""Data models for repository line statistics.

The stats endpoint returns one StatsResponse per analysed repository:
the echoed origin URL, per-language LanguageStat records sorted by line
count, and a grand total.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

COUNTERS = ("files", "lines", "codes", "comments", "blanks")


class StatsRequest(BaseModel):
    """Request model for the stats endpoint."""

    url: str


class LanguageStat(BaseModel):
    """Line and file counts for one language (or the total)."""

    model_config = ConfigDict(frozen=True)

    files: int = Field(default=0, ge=0)
    lines: int = Field(default=0, ge=0)  # codes + comments + blanks
    codes: int = Field(default=0, ge=0)
    comments: int = Field(default=0, ge=0)
    blanks: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_lines(self) -> "LanguageStat":
        expected = self.codes + self.comments + self.blanks
        if self.lines != expected:
            raise ValueError(
                f"lines must equal codes + comments + blanks ({expected}), got {self.lines}"
            )
        return self

    @classmethod
    def from_counts(cls, files: int, codes: int, comments: int, blanks: int) -> "LanguageStat":
        """Build a stat whose ``lines`` is derived from the three counters."""
        return cls(
            files=files,
            lines=codes + comments + blanks,
            codes=codes,
            comments=comments,
            blanks=blanks,
        )


class StatsResponse(BaseModel):
    """Response model for the stats endpoint."""

    model_config = ConfigDict(frozen=True)

    origin: str
    stats: list[tuple[str, LanguageStat]] = Field(default_factory=list)
    total: LanguageStat = Field(default_factory=LanguageStat)

    @model_validator(mode="after")
    def _check_total(self) -> "StatsResponse":
        for counter in COUNTERS:
            expected = sum(getattr(stat, counter) for _, stat in self.stats)
            actual = getattr(self.total, counter)
            if actual != expected:
                raise ValueError(f"total.{counter} must be {expected}, got {actual}")
        return self
