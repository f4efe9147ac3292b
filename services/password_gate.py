"""Password gate: unlock a protected note independently of fetching it."""

import logging

from pwdlib.exceptions import UnknownHashError

from errors import Internal, NotFound, Unauthorized
from models.notesmodel import NotesModel
from schemas.notesschema import NoteAccessSchema
from services.notes_store import NoteStore
from utils import verify_password

logger = logging.getLogger(__name__)


def check_password(note: NotesModel, password: str) -> bool:
    """Compare *password* against the note's stored hash.

    A protected note without a hash, or with a hash no configured hasher
    understands, is corrupt and raises Internal.
    """
    if note.is_missing_hash:
        logger.error("Note %s is password protected but has no password hash", note.id)
        raise Internal("Note password hash not found")

    try:
        return verify_password(password, note.password_hash)
    except UnknownHashError:
        logger.error("Note %s has a password hash in an unknown format", note.id)
        raise Internal("Note password hash is unreadable")


class PasswordGate:
    def __init__(self, store: NoteStore) -> None:
        self.store = store

    async def verify(self, note_id: str, password: str | None = None) -> NoteAccessSchema:
        note = await self.store.get(note_id)
        if note is None:
            raise NotFound("Note not found")

        if not note.is_password_protected:
            return NoteAccessSchema(note_id=note_id, has_access=True, is_password_protected=False)

        # Asking without a password is how callers learn a prompt is needed
        if not password:
            return NoteAccessSchema(note_id=note_id, has_access=False, is_password_protected=True)

        if not check_password(note, password):
            raise Unauthorized("Wrong password")

        return NoteAccessSchema(note_id=note_id, has_access=True, is_password_protected=True)
