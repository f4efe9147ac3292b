"""Access control for notes.

Every request is evaluated on its own; nothing about an unlocked note is
remembered between requests. The stored record never leaves this module,
only its public projection does, and that projection has no password hash.
"""

from dataclasses import dataclass
from enum import Enum

from errors import Forbidden, Unauthorized
from models.notesmodel import NotesModel
from schemas.notesschema import PublicNoteSchema
from schemas.userschema import IdentitySchema
from services.password_gate import check_password


class Visibility(str, Enum):
    OWNER_FULL = "owner_full"
    PUBLIC_READONLY = "public_readonly"
    UNLOCKED = "unlocked"
    LOCKED = "locked"


@dataclass(frozen=True)
class NoteView:
    visibility: Visibility
    note: PublicNoteSchema

    @property
    def is_owner(self) -> bool:
        return self.visibility is Visibility.OWNER_FULL

    @property
    def has_access(self) -> bool:
        return self.visibility is not Visibility.LOCKED


def _user_id(identity: IdentitySchema | None) -> str | None:
    return identity.user_id if identity is not None else None


class AccessEvaluator:

    def is_owner(self, note: NotesModel, identity: IdentitySchema | None) -> bool:
        return note.is_owned_by(_user_id(identity))

    def evaluate(
        self,
        note: NotesModel,
        identity: IdentitySchema | None,
        password: str | None = None,
    ) -> NoteView:
        """Decide what *identity* may see of *note*.

        Owners always get everything. Anyone else reads unprotected notes,
        and protected ones only when *password* matches; without a password
        the note comes back locked with its content withheld. A wrong
        password raises Unauthorized.
        """
        if self.is_owner(note, identity):
            return NoteView(Visibility.OWNER_FULL, note.to_public())

        if not note.is_password_protected:
            return NoteView(Visibility.PUBLIC_READONLY, note.to_public())

        if not password:
            return NoteView(Visibility.LOCKED, note.to_public(withhold_content=True))

        if not check_password(note, password):
            raise Unauthorized("Wrong password")

        return NoteView(Visibility.UNLOCKED, note.to_public())

    def require_owner(self, note: NotesModel, identity: IdentitySchema | None) -> None:
        if identity is None:
            raise Unauthorized("Login required")
        if not self.is_owner(note, identity):
            raise Forbidden("You have no rights over this note")

    def owned_views(
        self, notes: list[NotesModel], identity: IdentitySchema
    ) -> list[PublicNoteSchema]:
        return [note.to_public() for note in notes if self.is_owner(note, identity)]


access = AccessEvaluator()
