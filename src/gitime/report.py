"""Aggregate time spent across commits."""

import logging
from collections.abc import Iterable

from pydantic import BaseModel, Field

from gitime.duration import Duration
from gitime.extraction import collect_time_spent
from gitime.gitlog import Commit
from gitime.grammar import Grammar

logger = logging.getLogger(__name__)


class CommitTime(BaseModel):
    """Time declared in a single commit, subject and body together."""

    commit: Commit
    duration: Duration


class TimeReport(BaseModel):
    """Time spent over a set of commits.

    Attributes:
        entries: Commits that declare some time, in scan order.
        total: Sum of every directive found.
        commits_scanned: Number of commits read, with or without time.
    """

    entries: list[CommitTime] = Field(default_factory=list)
    total: Duration = Field(default_factory=Duration)
    commits_scanned: int = 0

    @property
    def total_minutes(self) -> int:
        return self.total.to_minutes()

    def to_dict(self) -> dict:
        """Serialize for JSON output, including the derived totals."""
        data = self.model_dump(mode="json")
        data["total_minutes"] = self.total_minutes
        data["total_formatted"] = self.total.format()
        return data


def collect_total(texts: Iterable[str], grammar: Grammar | None = None) -> Duration:
    """Sum the directives found in several blocks of text."""
    total = Duration()
    for text in texts:
        total.add(collect_time_spent(text, grammar))
    return total


def build_report(commits: Iterable[Commit], grammar: Grammar | None = None) -> TimeReport:
    """Scan the subject and body of every commit.

    Args:
        commits: Commits to scan.
        grammar: Grammar to apply. Defaults to the built-in grammar.

    Returns:
        Report with per-commit durations and the grand total.
    """
    report = TimeReport()
    for commit in commits:
        report.commits_scanned += 1
        spent = collect_total((commit.subject, commit.body), grammar)
        if spent.is_zero():
            continue
        logger.debug(f"{commit.short_hash}: {spent}")
        report.entries.append(CommitTime(commit=commit, duration=spent))
        report.total.add(spent)

    logger.info(
        f"Found time in {len(report.entries)} of {report.commits_scanned} commits: "
        f"{report.total_minutes} minutes"
    )
    return report
