"""Duration value collected from time-tracking directives.

A duration keeps the five magnitudes a directive can carry side by side
instead of normalising them, so that ``1mo`` stays one month when it is
displayed. Conversion to a single number uses a work calendar rather than
real calendar lengths.
"""

import logging
import math

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 8
DAYS_PER_WEEK = 5
WEEKS_PER_MONTH = 4

MINUTES_PER_DAY = HOURS_PER_DAY * MINUTES_PER_HOUR
MINUTES_PER_WEEK = DAYS_PER_WEEK * MINUTES_PER_DAY
MINUTES_PER_MONTH = WEEKS_PER_MONTH * MINUTES_PER_WEEK

# Field name, singular unit label and minute multiplier, largest unit first.
COMPONENTS: tuple[tuple[str, str, int], ...] = (
    ("months", "month", MINUTES_PER_MONTH),
    ("weeks", "week", MINUTES_PER_WEEK),
    ("days", "day", MINUTES_PER_DAY),
    ("hours", "hour", MINUTES_PER_HOUR),
    ("minutes", "minute", 1),
)

COMPONENT_NAMES: tuple[str, ...] = tuple(name for name, _, _ in COMPONENTS)


class Duration(BaseModel):
    """Time spent, as months, weeks, days, hours and minutes.

    All magnitudes are non-negative floats. Instances are accumulated with
    :meth:`add`, which updates the left-hand side in place, or with ``+``,
    which returns a new instance.

    Example:
        total = Duration()
        total.add(Duration(hours=1)).add(Duration(minutes=30))
        total.to_minutes()  # 90
        str(total)          # "1.0 hour 30.0 minutes"
    """

    months: float = Field(default=0.0, ge=0, description="Months spent (4 weeks each)")
    weeks: float = Field(default=0.0, ge=0, description="Weeks spent (5 days each)")
    days: float = Field(default=0.0, ge=0, description="Days spent (8 hours each)")
    hours: float = Field(default=0.0, ge=0, description="Hours spent")
    minutes: float = Field(default=0.0, ge=0, description="Minutes spent")

    def add(self, other: "Duration") -> "Duration":
        """Add another duration into this one, field by field.

        Args:
            other: Duration to add. It is only read.

        Returns:
            This duration, so calls can be chained.
        """
        self.months += other.months
        self.weeks += other.weeks
        self.days += other.days
        self.hours += other.hours
        self.minutes += other.minutes
        return self

    def __add__(self, other: object) -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return self.model_copy().add(other)

    def is_zero(self) -> bool:
        """Return True when no time at all has been recorded."""
        return all(getattr(self, name) == 0.0 for name in COMPONENT_NAMES)

    def to_minutes(self) -> int:
        """Convert to a whole number of minutes on the work calendar.

        An hour is 60 minutes, a day 8 hours, a week 5 days and a month
        4 weeks. Any fractional minute left over is truncated. A total too
        large to represent is logged and counted as zero.
        """
        minutes = 0.0
        for name, _, multiplier in reversed(COMPONENTS):
            minutes += getattr(self, name) * multiplier
        if not math.isfinite(minutes):
            logger.error(f"Duration too large to convert to minutes: {self!r}")
            return 0
        return int(minutes)

    def format(self) -> str:
        """Render the non-zero fields, e.g. ``"2.0 days 1.5 hours"``.

        Returns:
            The formatted duration, or an empty string when it is zero.
        """
        parts = []
        for name, unit, _ in COMPONENTS:
            value = getattr(self, name)
            if value == 0.0:
                continue
            part = f"{value:.1f} {unit}"
            if value >= 2.0:
                part += "s"
            parts.append(part)
        return " ".join(parts)

    def __str__(self) -> str:
        return self.format()
