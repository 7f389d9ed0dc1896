"""
Deadline-driven urgency classification.

Urgency is a function of the current time, so it is derived fresh on
every read and never persisted. If profiling ever calls for caching,
cached tiers must be invalidated at least once per minute.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from models import Note


class UrgencyTier(str, Enum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    PAST_DUE = "past_due"


@dataclass(frozen=True)
class TierStyle:
    priority: int
    label: str
    color: int
    marker: str


# NONE has no color of its own: notes without a deadline keep their
# assigned display color. NO_DEADLINE_COLOR is only a fallback.
NO_DEADLINE_COLOR = 0xFF9E9EBF

TIER_STYLES = {
    UrgencyTier.NONE: TierStyle(0, "No deadline", NO_DEADLINE_COLOR, "default"),
    UrgencyTier.LOW: TierStyle(1, "Low priority", 0xFF54D3AD, "low"),
    UrgencyTier.MEDIUM: TierStyle(2, "Medium priority", 0xFFFFB443, "medium"),
    UrgencyTier.HIGH: TierStyle(3, "High priority", 0xFFFF6B6B, "high"),
    UrgencyTier.PAST_DUE: TierStyle(4, "Past due", 0xFFFF4757, "past"),
}


@dataclass(frozen=True)
class Urgency:
    """
    Everything the presentation layer needs to draw one note.
    """

    tier: UrgencyTier
    priority: int
    label: str
    color: int
    marker: str
    deadline_text: str


def classify(deadline: datetime | None, now: datetime) -> UrgencyTier:
    """
    Map a deadline to its urgency tier relative to `now`.
    """
    if deadline is None:
        return UrgencyTier.NONE
    if deadline < now:
        return UrgencyTier.PAST_DUE

    # timedelta.days floors, and the difference is never negative here
    days_remaining = (deadline - now).days
    if days_remaining < 1:
        return UrgencyTier.HIGH
    if days_remaining < 3:
        return UrgencyTier.MEDIUM
    return UrgencyTier.LOW


def style_for(tier: UrgencyTier) -> TierStyle:
    return TIER_STYLES[tier]


def display_color(note: Note, now: datetime) -> int:
    """
    Tier color for notes with a deadline, the note's own color otherwise.
    """
    tier = classify(note.deadline, now)
    if tier is UrgencyTier.NONE:
        return note.display_color
    return TIER_STYLES[tier].color


def format_deadline(deadline: datetime | None, now: datetime) -> str:
    """
    Human phrasing of a deadline relative to `now`, in whole days.
    """
    if deadline is None:
        return "No deadline"

    seconds = (deadline - now).total_seconds()
    # whole days, truncated toward zero
    days = int(abs(seconds) // 86400)
    if seconds < 0:
        if days == 0:
            return "Overdue today"
        return "Overdue by 1 day" if days == 1 else f"Overdue by {days} days"

    if days == 0:
        return "Due today"
    return "Due tomorrow" if days == 1 else f"Due in {days} days"


def describe(note: Note, now: datetime) -> Urgency:
    tier = classify(note.deadline, now)
    style = TIER_STYLES[tier]
    return Urgency(
        tier=tier,
        priority=style.priority,
        label=style.label,
        color=display_color(note, now),
        marker=style.marker,
        deadline_text=format_deadline(note.deadline, now),
    )
