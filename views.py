"""
Presentation helpers: note color palette, deadline ordering and
weekday grouping. The store hands notes back in insertion order and
callers pick their view here.
"""

import random
from collections.abc import Iterable
from datetime import datetime

from models import Note

# ARGB colors a new note can be given when the caller does not pick one
NOTE_PALETTE = (
    0xFFFF4EC0,  # pink
    0xFF54D3AD,  # teal
    0xFF6A35FC,  # purple
    0xFF00A8E8,  # blue
    0xFFFFB443,  # orange
    0xFFFF8FCB,  # light pink
    0xFF08A88A,  # green
    0xFFFF6B6B,  # red
)


def pick_color(rng: random.Random) -> int:
    return rng.choice(NOTE_PALETTE)


def sort_by_deadline(notes: Iterable[Note]) -> list[Note]:
    """
    Earliest deadline first. Notes without a deadline go last and keep
    their relative order.
    """
    return sorted(notes, key=lambda n: (n.deadline is None, n.deadline or datetime.min))


def group_by_weekday(notes: Iterable[Note]) -> dict[int, list[Note]]:
    """
    Buckets notes by the ISO weekday of their deadline (1=Mon .. 7=Sun).

    Every weekday is present in the result. A note without a deadline
    belongs to every day, so it shows up in all seven buckets.
    """
    groups: dict[int, list[Note]] = {day: [] for day in range(1, 8)}
    for note in sort_by_deadline(notes):
        if note.deadline is None:
            for bucket in groups.values():
                bucket.append(note)
        else:
            groups[note.deadline.isoweekday()].append(note)
    return groups
