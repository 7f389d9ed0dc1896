"""
A small demo of the note lifecycle engine:
create notes, list them, and show their live urgency.
"""

import asyncio
import random
from datetime import datetime, timedelta

import config
import urgency
import week
from database import SQLiteKeyValueStore
from models import NoteDraft
from note_store import NoteStore
from views import sort_by_deadline


async def demo():
    config.configure_logging()

    # 1. setup the durable store
    async with SQLiteKeyValueStore(config.DB_PATH) as kv_store:
        store = NoteStore(kv_store, rng=random.Random(config.RANDOM_SEED))
        now = datetime.now()

        # 2. create a few notes (business logic)
        drafts = [
            NoteDraft("Coffee", "Meet Sam at the corner cafe", 40.7128, -74.0060),
            NoteDraft(
                "Library books",
                "Return before the fine kicks in",
                40.7536,
                -73.9832,
                deadline=now + timedelta(hours=12),
            ),
            NoteDraft(
                "Farmers market",
                "Pick up peaches",
                40.7359,
                -73.9911,
                deadline=now + timedelta(days=4),
            ),
        ]
        for draft in drafts:
            print(f"Saving note: {draft.title}")
            await store.add(draft)

        # 3. retrieve and display all notes
        notes = await store.list()
        print("\n--- Reading from Store ---")
        for note in sort_by_deadline(notes):
            info = urgency.describe(note, now)
            print(f"ID: {note.id}")
            print(f"Title: {note.title}")
            print(f"Urgency: {info.label} ({info.deadline_text})")
            print(f"Color: #{info.color:08X}")
            print("-" * 20)

        print(f"Notes reset in {week.days_remaining_in_week(now)} day(s)")


if __name__ == "__main__":
    asyncio.run(demo())
