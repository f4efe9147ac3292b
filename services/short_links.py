from errors import NotFound
from schemas.notesschema import ShareableNoteSchema
from services.notes_store import NoteStore


class ShortLinkResolver:
    """Public, ownership-blind lookup of a note by its short link."""

    def __init__(self, store: NoteStore) -> None:
        self.store = store

    async def resolve(self, short_url: str) -> ShareableNoteSchema:
        note = await self.store.get_by_short_url(short_url)
        if note is None:
            raise NotFound("Note not found")
        return note.to_shareable()
