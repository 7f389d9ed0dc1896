"""
data model for geo-tagged notes
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, AliasChoices, BaseModel, ConfigDict, Field


def to_local_naive(value: datetime) -> datetime:
    """
    Offset-carrying instants become naive local time, so every comparison
    happens between naive datetimes.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


LocalDatetime = Annotated[datetime, AfterValidator(to_local_naive)]


@dataclass
class NoteDraft:
    """
    What a caller supplies to create a note. The store fills in the rest.
    """

    title: str
    description: str
    latitude: float
    longitude: float
    deadline: datetime | None = None
    display_color: int | None = None


@dataclass
class Note:
    """
    A stored note. `id` and `created_at` never change after creation.
    """

    id: str
    title: str
    description: str
    latitude: float
    longitude: float
    created_at: datetime
    display_color: int
    deadline: datetime | None = None


class NoteRecord(BaseModel):
    """
    Persisted form of a note: one JSON object per list entry.

    The legacy key names `creationDate` and `color` are accepted on read
    so older collections still load.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str
    latitude: float
    longitude: float
    created_at: LocalDatetime = Field(
        alias="createdAt",
        validation_alias=AliasChoices("createdAt", "creationDate"),
    )
    deadline: LocalDatetime | None = None
    display_color: int = Field(
        alias="displayColor",
        validation_alias=AliasChoices("displayColor", "color"),
    )

    @classmethod
    def from_note(cls, note: Note) -> "NoteRecord":
        return cls(
            id=note.id,
            title=note.title,
            description=note.description,
            latitude=note.latitude,
            longitude=note.longitude,
            created_at=note.created_at,
            deadline=note.deadline,
            display_color=note.display_color,
        )

    def to_note(self) -> Note:
        return Note(
            id=self.id,
            title=self.title,
            description=self.description,
            latitude=self.latitude,
            longitude=self.longitude,
            created_at=self.created_at,
            deadline=self.deadline,
            display_color=self.display_color,
        )


def note_to_json(note: Note) -> str:
    return NoteRecord.from_note(note).model_dump_json(by_alias=True, exclude_none=True)


def note_from_json(raw: str) -> Note:
    """
    Raises pydantic.ValidationError for malformed records.
    """
    return NoteRecord.model_validate_json(raw).to_note()
