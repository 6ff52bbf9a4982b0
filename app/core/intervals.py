"""Half-open time interval helpers used for booking conflict detection."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import time
from typing import Any


@dataclass(frozen=True)
class TimeWindow:
    """A ``[start, end)`` window within a single day."""

    start: time
    end: time

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise ValueError("End time must be after start time")

    def overlaps(self, other: "TimeWindow") -> bool:
        """Check whether two windows share any instant."""
        return intervals_overlap(self.start, self.end, other.start, other.end)

    def label(self) -> str:
        """Format as ``HH:MM-HH:MM``."""
        return f"{self.start.strftime('%H:%M')}-{self.end.strftime('%H:%M')}"


def intervals_overlap(start_a: time, end_a: time, start_b: time, end_b: time) -> bool:
    """
    Check whether ``[start_a, end_a)`` and ``[start_b, end_b)`` overlap.

    Touching intervals (``end_a == start_b``) do not overlap.
    """
    return start_a < end_b and start_b < end_a


def find_conflict(
    start: time,
    end: time,
    existing: Iterable[Mapping[str, Any]],
) -> Mapping[str, Any] | None:
    """
    Find the first existing booking that overlaps a candidate window.

    Args:
        start: Candidate start time
        end: Candidate end time
        existing: Rows carrying ``start_time`` and ``end_time``

    Returns:
        The first overlapping row, or None
    """
    for row in existing:
        if intervals_overlap(start, end, row["start_time"], row["end_time"]):
            return row
    return None
