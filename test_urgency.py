from datetime import datetime, timedelta

import pytest

import urgency
from models import Note
from urgency import UrgencyTier

NOW = datetime(2024, 6, 12, 10, 30)


def make_note(deadline=None, display_color=0xFF6A35FC):
    return Note(
        id="n1",
        title="Groceries",
        description="Milk and eggs",
        latitude=51.5,
        longitude=-0.12,
        created_at=NOW - timedelta(days=1),
        display_color=display_color,
        deadline=deadline,
    )


@pytest.mark.parametrize(
    "offset, tier",
    [
        (timedelta(hours=12), UrgencyTier.HIGH),
        (timedelta(days=2), UrgencyTier.MEDIUM),
        (timedelta(days=5), UrgencyTier.LOW),
        (timedelta(hours=-1), UrgencyTier.PAST_DUE),
        (timedelta(0), UrgencyTier.HIGH),
        (timedelta(days=1), UrgencyTier.MEDIUM),
        (timedelta(days=3), UrgencyTier.LOW),
        (timedelta(days=2, hours=23), UrgencyTier.MEDIUM),
    ],
)
def test_classify_tiers(offset, tier):
    assert urgency.classify(NOW + offset, NOW) is tier


def test_classify_without_deadline_is_none():
    for now in (NOW, NOW + timedelta(days=400), NOW - timedelta(days=400)):
        assert urgency.classify(None, now) is UrgencyTier.NONE


def test_past_deadlines_are_past_due():
    for minutes in (1, 60, 60 * 24, 60 * 24 * 30):
        assert urgency.classify(NOW - timedelta(minutes=minutes), NOW) is UrgencyTier.PAST_DUE


def test_every_tier_has_a_style():
    priorities = [urgency.style_for(tier).priority for tier in UrgencyTier]
    assert sorted(priorities) == [0, 1, 2, 3, 4]


def test_display_color_uses_note_color_without_deadline():
    note = make_note(display_color=0xFF00A8E8)
    assert urgency.display_color(note, NOW) == 0xFF00A8E8


def test_display_color_uses_tier_color_with_deadline():
    note = make_note(deadline=NOW - timedelta(hours=1))
    assert urgency.display_color(note, NOW) == 0xFFFF4757


@pytest.mark.parametrize(
    "deadline, text",
    [
        (None, "No deadline"),
        (NOW + timedelta(hours=3), "Due today"),
        (NOW + timedelta(days=1, hours=2), "Due tomorrow"),
        (NOW + timedelta(days=4), "Due in 4 days"),
        (NOW - timedelta(hours=3), "Overdue today"),
        (NOW - timedelta(days=1, hours=2), "Overdue by 1 day"),
        (NOW - timedelta(days=6), "Overdue by 6 days"),
    ],
)
def test_format_deadline(deadline, text):
    assert urgency.format_deadline(deadline, NOW) == text


def test_describe_bundles_tier_and_style():
    info = urgency.describe(make_note(deadline=NOW + timedelta(days=2)), NOW)
    assert info.tier is UrgencyTier.MEDIUM
    assert info.priority == 2
    assert info.label == "Medium priority"
    assert info.color == 0xFFFFB443
    assert info.marker == "medium"
    assert info.deadline_text == "Due in 2 days"


def test_urgency_follows_the_clock():
    note = make_note(deadline=NOW + timedelta(days=5))
    assert urgency.describe(note, NOW).tier is UrgencyTier.LOW
    assert urgency.describe(note, NOW + timedelta(days=4, hours=12)).tier is UrgencyTier.HIGH
    assert urgency.describe(note, NOW + timedelta(days=6)).tier is UrgencyTier.PAST_DUE
