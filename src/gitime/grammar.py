"""Directive grammar for /spend and /spent commands.

A directive is a line starting with ``/spend`` or ``/spent`` followed by
quantities in the order months, weeks, days, hours, minutes, each one
optional. Units follow the GitLab time tracking abbreviations:
https://docs.gitlab.com/ee/user/project/time_tracking.html#available-time-units

Quantities have to appear in that order. ``/spend 30m 1h`` only picks up
the leading group it can read in order, and nothing after it.

A :class:`Grammar` is an ordered collection of matchers tried by decreasing
priority. The default grammar is compiled once at import time and never
changes; extra directive shapes are added by building a new grammar with
:meth:`Grammar.with_matcher`.
"""

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from gitime.duration import COMPONENT_NAMES

# ASCII whitespace only. Python's \s also accepts \v and Unicode spaces such as NBSP.
SPACE = r"[\t\n\f\r ]"

DIRECTIVE = rf"^/spen[dt]{SPACE}+"

# N, N., .N and N.N
NUMBER = r"[0-9]+[.]?[0-9]*|[0-9]*[.]?[0-9]+"

MONTH_UNITS = r"mo|months?"
WEEK_UNITS = r"we?|weeks?"
DAY_UNITS = r"da?|days?"
HOUR_UNITS = r"ho?|hours?"
MINUTE_UNITS = r"mi?|mins?|minutes?"


def quantity(name: str, units: str, unit_optional: bool = False) -> str:
    """Build the pattern for one optional ``<number><unit>`` group.

    Args:
        name: Name of the capture group holding the number.
        units: Alternation of accepted unit spellings.
        unit_optional: Whether the number may stand without a unit.

    Returns:
        Pattern text for the whole group, itself optional.
    """
    unit = f"(?:{units})"
    if unit_optional:
        unit += "?"
    return rf"(?:(?P<{name}>{NUMBER}){SPACE}*{unit}{SPACE}*)?"


SPENT_ALL_PATTERN = (
    DIRECTIVE
    + quantity("months", MONTH_UNITS)
    + quantity("weeks", WEEK_UNITS)
    + quantity("days", DAY_UNITS)
    + quantity("hours", HOUR_UNITS)
    + quantity("minutes", MINUTE_UNITS, unit_optional=True)
)


@dataclass(frozen=True)
class Matcher:
    """One compiled directive shape.

    The pattern exposes the quantities as named groups ``months``,
    ``weeks``, ``days``, ``hours`` and ``minutes``. Groups it does not
    define are read as zero.
    """

    name: str
    pattern: re.Pattern[str]

    @classmethod
    def compile(cls, name: str, pattern: str, flags: int = 0) -> "Matcher":
        """Compile a pattern into a matcher.

        Raises:
            ValueError: If the pattern names a group that is not a
                duration component.
        """
        compiled = re.compile(pattern, flags)
        unknown = set(compiled.groupindex) - set(COMPONENT_NAMES)
        if unknown:
            raise ValueError(
                f"Matcher {name!r} has unknown groups: {', '.join(sorted(unknown))}"
            )
        return cls(name=name, pattern=compiled)

    def match(self, line: str) -> re.Match[str] | None:
        return self.pattern.search(line)


class Grammar:
    """Ordered, immutable collection of matchers. The first match wins."""

    def __init__(self, matchers: Iterable[Matcher] = ()) -> None:
        self._matchers = tuple(matchers)

    @property
    def matchers(self) -> tuple[Matcher, ...]:
        """Matchers by decreasing priority."""
        return self._matchers

    def with_matcher(self, matcher: Matcher) -> "Grammar":
        """Return a new grammar that also tries ``matcher``, after the others."""
        return Grammar((*self._matchers, matcher))

    def match(self, line: str) -> tuple[Matcher, re.Match[str]] | None:
        """Find the first matcher accepting ``line``.

        Returns:
            The matcher and its match, or None if no matcher accepts the line.
        """
        for matcher in self._matchers:
            match = matcher.match(line)
            if match is not None:
                return matcher, match
        return None

    def __iter__(self) -> Iterator[Matcher]:
        return iter(self._matchers)

    def __len__(self) -> int:
        return len(self._matchers)

    def __repr__(self) -> str:
        names = ", ".join(m.name for m in self._matchers)
        return f"Grammar([{names}])"


SPENT_ALL = Matcher.compile("spent_all", SPENT_ALL_PATTERN)

# Keep these sorted by decreasing priority, since the first match wins.
DEFAULT_GRAMMAR = Grammar([SPENT_ALL])


def get_default_grammar() -> Grammar:
    """Get the grammar used when callers don't provide one."""
    return DEFAULT_GRAMMAR
