"""gitime - Sum the /spend and /spent time-tracking directives in git commit messages."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("gitime")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

from gitime.duration import Duration
from gitime.extraction import collect_time_spent, extract_time_spent_from_line
from gitime.grammar import DEFAULT_GRAMMAR, Grammar, Matcher, get_default_grammar
from gitime.report import TimeReport, build_report, collect_total

__all__ = [
    "Duration",
    "Grammar",
    "Matcher",
    "DEFAULT_GRAMMAR",
    "get_default_grammar",
    "extract_time_spent_from_line",
    "collect_time_spent",
    "collect_total",
    "build_report",
    "TimeReport",
]
