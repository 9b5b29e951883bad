"""Extract time spent from lines and messages.

Extraction is best effort: a line that is not a directive is skipped, and
a quantity that cannot be read is logged and counted as zero, so one bad
line never stops a scan.
"""

import logging
import math
import re

from gitime.duration import COMPONENT_NAMES, COMPONENTS, Duration
from gitime.grammar import Grammar, Matcher, get_default_grammar

logger = logging.getLogger(__name__)

_MULTIPLIERS = {name: multiplier for name, _, multiplier in COMPONENTS}


def extract_time_component(match: re.Match[str], matcher: Matcher, component: str) -> float:
    """Read one quantity out of a match.

    Args:
        match: Match produced by ``matcher``.
        matcher: Matcher the match came from, used for diagnostics.
        component: Group name, one of months, weeks, days, hours, minutes.

    Returns:
        The quantity, or 0.0 if the group is absent or unreadable.
    """
    text = match.groupdict().get(component) or "0"
    try:
        value = float(text)
    except ValueError:
        # Only reachable with a broken matcher pattern.
        logger.error(
            f"Cannot parse {component} {text!r} with matcher "
            f"{matcher.name} ({matcher.pattern.pattern})"
        )
        return 0.0

    if value < 0 or not math.isfinite(value * _MULTIPLIERS.get(component, 1)):
        logger.error(
            f"Ignoring {component} {text!r} with matcher "
            f"{matcher.name} ({matcher.pattern.pattern})"
        )
        return 0.0

    return value


def extract_time_spent_from_line(line: str, grammar: Grammar | None = None) -> Duration | None:
    """Extract the time spent declared on a single, trimmed line.

    Args:
        line: The line to read.
        grammar: Grammar to apply. Defaults to the built-in grammar.

    Returns:
        The declared duration, or None if the line holds no directive.
    """
    if grammar is None:
        grammar = get_default_grammar()

    found = grammar.match(line)
    if found is None:
        return None

    matcher, match = found
    values = {
        component: extract_time_component(match, matcher, component)
        for component in COMPONENT_NAMES
    }
    logger.debug(f"Matched {line!r} with {matcher.name}: {values}")
    return Duration(**values)


def collect_time_spent(message: str, grammar: Grammar | None = None) -> Duration:
    """Sum every /spend and /spent directive found in a message.

    Each line is trimmed and read on its own; lines without a directive
    are ignored. If no unit is given, minutes are assumed.

    Args:
        message: Text to scan, possibly empty or spanning several lines.
        grammar: Grammar to apply. Defaults to the built-in grammar.

    Returns:
        The total duration, zero if the message holds no directive.
    """
    total = Duration()
    for line in message.split("\n"):
        spent = extract_time_spent_from_line(line.strip(), grammar)
        if spent is None:
            continue
        total.add(spent)
    return total
