"""Task analytics.

Derived, read-only figures for the analytics panel:
- total, done and pending counts over the full task set,
- completion rate as a whole percentage.
"""

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List

from .models import Task


def completion_rate(done: int, total: int) -> int:
    """Return `done / total` as a whole percentage, 0 when there are no tasks.

    Halves round up (12.5 -> 13), matching what the browser panel shows.
    """
    if total <= 0:
        return 0
    return int(math.floor(done * 100.0 / total + 0.5))


@dataclass(frozen=True)
class Analytics:
    total: int
    done: int
    pending: int

    @property
    def rate(self) -> int:
        return completion_rate(self.done, self.total)

    @property
    def rate_label(self) -> str:
        return f"{self.rate}%"

    def to_dict(self) -> Dict[str, object]:
        return {
            "total": self.total,
            "done": self.done,
            "pending": self.pending,
            "rate": self.rate_label,
        }


def compute_analytics(tasks: Iterable[Task]) -> Analytics:
    """Count tasks over the whole collection (not filtered by project)."""
    total = 0
    done = 0
    for t in tasks:
        total += 1
        if t.done:
            done += 1
    return Analytics(total=total, done=done, pending=total - done)


def filter_by_project(tasks: Iterable[Task], project: str) -> List[Task]:
    return [t for t in tasks if t.project == project]
