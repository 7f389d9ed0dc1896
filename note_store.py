"""
The note lifecycle engine.

NoteStore owns the persisted note collection and the last purge
timestamp. Every operation that reads the collection first runs the
weekly purge check: on a Sunday the whole collection is cleared, at
most once per calendar day.

The purge only fires when the store is used on a Sunday. If nothing
touches the store that day, notes live on until the next Sunday the
store is used. There is no background timer.
"""

from __future__ import annotations

import asyncio
import logging
import random
import uuid
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from pydantic import ValidationError

import week
from database import KeyValueStore
from exceptions import DeserializationError, NotFoundError, PersistenceError
from models import Note, NoteDraft, note_from_json, note_to_json
from views import pick_color

logger = logging.getLogger(__name__)

NOTES_KEY = "notes"
LAST_PURGE_KEY = "last_purge_date"


class NoteStore:
    """
    Create, update, delete and list notes on top of a KeyValueStore.

    Each operation is a full read-collection, mutate, write-collection
    cycle, serialized by a lock so concurrent callers cannot lose
    updates.
    """

    def __init__(
        self,
        store: KeyValueStore,
        clock: Callable[[], datetime] = datetime.now,
        rng: random.Random | None = None,
    ):
        self.store = store
        self.clock = clock
        self.rng = rng or random.Random()
        self._lock = asyncio.Lock()

    # --- PUBLIC OPERATIONS ---

    async def list(self) -> list[Note]:
        """
        All notes in insertion order, after the purge check.
        """
        async with self._lock:
            await self._check_and_purge()
            return await self._load()

    async def get(self, note_id: str) -> Note:
        async with self._lock:
            await self._check_and_purge()
            for note in await self._load():
                if note.id == note_id:
                    return note
        raise NotFoundError(note_id)

    async def add(self, draft: NoteDraft) -> Note:
        """
        Creates a note from a draft: new id, created now, and a palette
        color when the draft has none.
        """
        async with self._lock:
            await self._check_and_purge()
            notes = await self._load()

            display_color = draft.display_color
            if display_color is None:
                display_color = pick_color(self.rng)

            note = Note(
                id=str(uuid.uuid4()),
                title=draft.title,
                description=draft.description,
                latitude=draft.latitude,
                longitude=draft.longitude,
                created_at=self.clock(),
                deadline=draft.deadline,
                display_color=display_color,
            )
            notes.append(note)
            await self._save(notes)

        logger.debug("Added note %s", note.id)
        return note

    async def update(self, note: Note):
        """
        Replaces the note with the same id in place.
        The stored created_at and display_color are kept whatever the
        caller passes.
        """
        async with self._lock:
            await self._check_and_purge()
            notes = await self._load()
            for index, existing in enumerate(notes):
                if existing.id == note.id:
                    notes[index] = replace(
                        note,
                        created_at=existing.created_at,
                        display_color=existing.display_color,
                    )
                    break
            else:
                raise NotFoundError(note.id)
            await self._save(notes)

        logger.debug("Updated note %s", note.id)

    async def delete(self, note_id: str):
        """
        Removes a note. Deleting an unknown id does nothing.
        """
        async with self._lock:
            await self._check_and_purge()
            notes = await self._load()
            remaining = [n for n in notes if n.id != note_id]
            if len(remaining) == len(notes):
                return
            await self._save(remaining)

        logger.debug("Deleted note %s", note_id)

    async def purge_all(self):
        """
        Clears the whole collection. Does not touch the last purge date.
        """
        async with self._lock:
            await self._purge()

    async def last_purge_at(self) -> datetime | None:
        async with self._lock:
            return await self._read_last_purge()

    # --- PURGE CHECK ---

    async def _check_and_purge(self):
        now = self.clock()
        if not week.is_purge_day(now):
            return

        last_purge = await self._read_last_purge()
        if last_purge is not None and week.is_same_day(last_purge, now):
            return

        await self._purge()
        written = await self.store.set_string(LAST_PURGE_KEY, now.isoformat())
        _ensure_written(written, LAST_PURGE_KEY)
        logger.info("Weekly purge recorded at %s", now.isoformat())

    async def _purge(self):
        removed = len(await self.store.get_string_list(NOTES_KEY))
        _ensure_written(await self.store.set_string_list(NOTES_KEY, []), NOTES_KEY)
        logger.info("Purged %d note(s)", removed)

    async def _read_last_purge(self) -> datetime | None:
        raw = await self.store.get_string(LAST_PURGE_KEY)
        if raw is None:
            return None
        try:
            return datetime.fromisoformat(raw)
        except ValueError as e:
            logger.error("Unreadable %s value: %r", LAST_PURGE_KEY, raw)
            raise DeserializationError(
                f"Invalid {LAST_PURGE_KEY} value: {raw!r}", key=LAST_PURGE_KEY
            ) from e

    # --- COLLECTION I/O ---

    async def _load(self) -> list[Note]:
        notes = []
        for index, raw in enumerate(await self.store.get_string_list(NOTES_KEY)):
            try:
                notes.append(note_from_json(raw))
            except ValidationError as e:
                logger.error("Unreadable note record at index %d: %s", index, e)
                raise DeserializationError(
                    f"Invalid note record at index {index}", key=NOTES_KEY, index=index
                ) from e
        return notes

    async def _save(self, notes: list[Note]):
        records = [note_to_json(n) for n in notes]
        _ensure_written(await self.store.set_string_list(NOTES_KEY, records), NOTES_KEY)


def _ensure_written(written: bool, key: str):
    if not written:
        logger.error("Store rejected write of %r", key)
        raise PersistenceError(f"Could not write {key!r}")
