"""Note store backed by Redis.

Every multi-key write runs in a single MULTI/EXEC pipeline, so a note, its
short-link mapping and its index memberships are written or removed together.
Concurrent writers to the same note are last-write-wins.
"""

import logging

from pydantic import ValidationError as PydanticValidationError
from redis.asyncio.client import Redis

from database import NOTES_INDEX_KEY, note_key, short_key, user_notes_key
from models.notesmodel import NotesModel

logger = logging.getLogger(__name__)


class NoteStore:
    def __init__(self, redis: Redis) -> None:
        self.redis = redis

    async def save(self, note: NotesModel) -> None:
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.set(note_key(note.id), note.model_dump_json(by_alias=True))
            if note.short_url:
                pipe.set(short_key(note.short_url), note.id)
            pipe.sadd(NOTES_INDEX_KEY, note.id)
            if note.user_id:
                pipe.sadd(user_notes_key(note.user_id), note.id)
            await pipe.execute()

    async def get(self, note_id: str) -> NotesModel | None:
        data = await self.redis.get(note_key(note_id))
        if not data:
            return None
        return NotesModel.model_validate_json(data)

    async def get_by_short_url(self, short_url: str) -> NotesModel | None:
        note_id = await self.redis.get(short_key(short_url))
        if not note_id:
            return None
        return await self.get(note_id)

    async def get_many(self, note_ids: list[str]) -> list[NotesModel]:
        """Bulk fetch; missing or unreadable records are skipped."""
        if not note_ids:
            return []

        results = await self.redis.mget([note_key(note_id) for note_id in note_ids])

        notes = []
        for note_id, data in zip(note_ids, results):
            if not data:
                continue
            try:
                notes.append(NotesModel.model_validate_json(data))
            except PydanticValidationError as e:
                logger.warning("Skipping unreadable note %s: %s", note_id, e)
        return notes

    async def list_by_owner(self, user_id: str) -> list[NotesModel]:
        """Notes owned by *user_id*, newest first."""
        note_ids = await self.redis.smembers(user_notes_key(user_id))
        notes = await self.get_many(sorted(note_ids))
        owned = [note for note in notes if note.is_owned_by(user_id)]
        return sorted(owned, key=lambda note: note.created_at, reverse=True)

    async def delete(self, note_id: str) -> None:
        """Remove a note with its short link and index entries; unknown ids are ignored."""
        note = await self.get(note_id)
        if note is None:
            return

        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.delete(note_key(note.id))
            if note.short_url:
                pipe.delete(short_key(note.short_url))
            pipe.srem(NOTES_INDEX_KEY, note.id)
            if note.user_id:
                pipe.srem(user_notes_key(note.user_id), note.id)
            await pipe.execute()
