"""
Errors raised by the note store and its durable backing store.
"""


class NoteStoreError(Exception):
    """
    Base class for every error the note store reports to its caller.
    """


class NotFoundError(NoteStoreError):
    def __init__(self, note_id: str):
        super().__init__(f"Note not found: {note_id}")
        self.note_id = note_id


class PersistenceError(NoteStoreError):
    """
    The durable store failed to read or write. Not retried automatically.
    """


class DeserializationError(NoteStoreError):
    """
    A persisted record could not be decoded.

    The whole read fails rather than skipping the record, so corrupted
    data is never silently dropped.
    """

    def __init__(self, message: str, key: str, index: int | None = None):
        super().__init__(message)
        self.key = key
        self.index = index
