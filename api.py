"""
API layer exposing the note store to the presentation layer using FastAPI.
"""

import logging
import random
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Literal

from fastapi import Depends, FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

import config
import urgency
import week
from database import SQLiteKeyValueStore
from exceptions import DeserializationError, NotFoundError, PersistenceError
from models import LocalDatetime, Note, NoteDraft
from note_store import NoteStore
from urgency import UrgencyTier
from views import group_by_weekday, sort_by_deadline

logger = logging.getLogger(__name__)


# --- LIFESPAN MANAGER ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    config.configure_logging()

    # 1. Open the durable store once for the whole process
    kv_store = SQLiteKeyValueStore(config.DB_PATH)
    await kv_store.open()

    # 2. Build the lifecycle engine on top of it
    app.state.note_store = NoteStore(kv_store, rng=random.Random(config.RANDOM_SEED))

    logger.info("Startup: System Ready.")
    yield
    await kv_store.close()
    logger.info("Shutdown: Cleanup complete.")


app = FastAPI(title="Weekly Notes", lifespan=lifespan)


def get_note_store(request: Request) -> NoteStore:
    return request.app.state.note_store


def get_clock(store: NoteStore = Depends(get_note_store)):
    return store.clock


# --- ERROR HANDLERS ---
@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(DeserializationError)
async def deserialization_handler(request: Request, exc: DeserializationError):
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc), "key": exc.key, "index": exc.index},
    )


@app.exception_handler(PersistenceError)
async def persistence_handler(request: Request, exc: PersistenceError):
    return JSONResponse(status_code=503, content={"detail": str(exc)})


# --- MODELS ---
class NoteCreatePayload(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    latitude: float
    longitude: float
    deadline: LocalDatetime | None = None
    display_color: int | None = None


class NoteUpdatePayload(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    latitude: float
    longitude: float
    deadline: LocalDatetime | None = None


class NoteResponse(BaseModel):
    id: str
    title: str
    description: str
    latitude: float
    longitude: float
    created_at: datetime
    deadline: datetime | None
    display_color: int

    # derived on every request, never stored
    urgency: UrgencyTier
    priority: int
    urgency_label: str
    color: int
    marker: str
    deadline_text: str


class WeekResponse(BaseModel):
    start: datetime
    end: datetime
    days_remaining: int
    next_purge_at: datetime
    last_purge_at: datetime | None


def to_response(note: Note, now: datetime) -> NoteResponse:
    info = urgency.describe(note, now)
    return NoteResponse(
        id=note.id,
        title=note.title,
        description=note.description,
        latitude=note.latitude,
        longitude=note.longitude,
        created_at=note.created_at,
        deadline=note.deadline,
        display_color=note.display_color,
        urgency=info.tier,
        priority=info.priority,
        urgency_label=info.label,
        color=info.color,
        marker=info.marker,
        deadline_text=info.deadline_text,
    )


# --- ROUTES ---
@app.get("/notes", response_model=list[NoteResponse])
async def list_notes(
    sort: Literal["deadline"] | None = None,
    store: NoteStore = Depends(get_note_store),
    clock=Depends(get_clock),
):
    notes = await store.list()
    if sort == "deadline":
        notes = sort_by_deadline(notes)
    now = clock()
    return [to_response(note, now) for note in notes]


@app.get("/notes/by-weekday", response_model=dict[int, list[NoteResponse]])
async def list_notes_by_weekday(
    store: NoteStore = Depends(get_note_store),
    clock=Depends(get_clock),
):
    groups = group_by_weekday(await store.list())
    now = clock()
    return {day: [to_response(n, now) for n in notes] for day, notes in groups.items()}


@app.get("/notes/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: str,
    store: NoteStore = Depends(get_note_store),
    clock=Depends(get_clock),
):
    note = await store.get(note_id)
    return to_response(note, clock())


@app.post("/notes", response_model=NoteResponse, status_code=201)
async def create_note(
    payload: NoteCreatePayload,
    store: NoteStore = Depends(get_note_store),
    clock=Depends(get_clock),
):
    draft = NoteDraft(**payload.model_dump())
    note = await store.add(draft)
    return to_response(note, clock())


@app.put("/notes/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: str,
    payload: NoteUpdatePayload,
    store: NoteStore = Depends(get_note_store),
    clock=Depends(get_clock),
):
    existing = await store.get(note_id)
    updated = Note(
        id=note_id,
        created_at=existing.created_at,
        display_color=existing.display_color,
        **payload.model_dump(),
    )
    await store.update(updated)
    return to_response(updated, clock())


@app.delete("/notes/{note_id}", status_code=204)
async def delete_note(note_id: str, store: NoteStore = Depends(get_note_store)):
    await store.delete(note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.post("/notes/purge", status_code=204)
async def purge_notes(store: NoteStore = Depends(get_note_store)):
    await store.purge_all()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.get("/week", response_model=WeekResponse)
async def week_info(
    store: NoteStore = Depends(get_note_store),
    clock=Depends(get_clock),
):
    now = clock()
    return WeekResponse(
        start=week.start_of_week(now),
        end=week.end_of_week(now),
        days_remaining=week.days_remaining_in_week(now),
        next_purge_at=week.next_purge_at(now),
        last_purge_at=await store.last_purge_at(),
    )


# health check
@app.get("/health")
async def health_check(store: NoteStore = Depends(get_note_store)):
    """
    Simple health check endpoint.
    """
    db_connected = getattr(store.store, "is_open", True)
    return {"status": "operational", "db_connected": db_connected}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
