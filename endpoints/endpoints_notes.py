import logging
from typing import Annotated

from fastapi import Depends, APIRouter, Header

from auth import identity_optional, identity_required
from database import redisDep
from errors import NotFound, ValidationError
from models.notesmodel import NotesModel
from schemas.notesschema import (
    CreateNoteSchema,
    NotePasswordSchema,
    UpdateNoteSchema,
    VerifyPasswordSchema,
)
from schemas.userschema import IdentitySchema
from services.access import NoteView, access
from services.notes_store import NoteStore
from services.password_gate import PasswordGate
from utils import (
    generate_id,
    generate_short_url,
    hash_password,
    sanitize_content,
    sanitize_title,
    utcnow,
)

logger = logging.getLogger(__name__)

router_notes = APIRouter(prefix="/notes", tags=["Notes"])


def get_note_store(redis: redisDep) -> NoteStore:
    return NoteStore(redis)


noteStoreDep = Annotated[NoteStore, Depends(get_note_store)]


async def get_existing_note(note_id: str, store: NoteStore) -> NotesModel:
    note = await store.get(note_id)
    if note is None:
        raise NotFound("Note not found")
    return note


def view_response(view: NoteView) -> dict:
    return {
        "success": True,
        "data": view.note.to_json(),
        "isOwner": view.is_owner,
        "hasAccess": view.has_access,
        "visibility": view.visibility.value,
    }


@router_notes.post(
    "",
    description="Accepts note object and bearer token. Creates the note with a short link, protected if a password is given",
    summary="Create new note",
)
async def create_new_note(
    createNote: CreateNoteSchema,
    store: noteStoreDep,
    identity: IdentitySchema = Depends(identity_required),
):
    title = sanitize_title(createNote.title)
    if not title:
        raise ValidationError("Title is required")

    now = utcnow()
    new_note = NotesModel(
        id=generate_id(),
        title=title,
        content=sanitize_content(createNote.content),
        created_at=now,
        updated_at=now,
        short_url=generate_short_url(),
        user_id=identity.user_id,
    )
    if createNote.password and createNote.password.strip():
        new_note.set_password(hash_password(createNote.password))

    await store.save(new_note)
    logger.info("User %s created note %s", identity.user_id, new_note.id)

    return {"success": True, "data": new_note.to_public().to_json()}


@router_notes.get(
    "",
    description="Accepts bearer token. Returns the caller's notes, newest first",
    summary="Get notes",
)
async def get_notes(
    store: noteStoreDep,
    identity: IdentitySchema = Depends(identity_required),
):
    notes = await store.list_by_owner(identity.user_id)

    return {
        "success": True,
        "data": [note.to_json() for note in access.owned_views(notes, identity)],
    }


@router_notes.get(
    "/{note_id}",
    description="Bearer token optional. Owners get full access, everyone else a read-only view; "
    "protected notes stay locked unless X-Note-Password holds the right password (ASCII only, see /unlock)",
    summary="Get note",
)
async def get_note(
    note_id: str,
    store: noteStoreDep,
    identity: IdentitySchema | None = Depends(identity_optional),
    note_password: str | None = Header(default=None, alias="X-Note-Password"),
):
    note = await get_existing_note(note_id, store)

    return view_response(access.evaluate(note, identity, note_password))


@router_notes.post(
    "/{note_id}/unlock",
    description="Bearer token optional. Same as getting the note, with the password sent in the body "
    "so any characters are accepted",
    summary="Unlock note",
)
async def unlock_note(
    note_id: str,
    store: noteStoreDep,
    unlockNote: VerifyPasswordSchema | None = None,
    identity: IdentitySchema | None = Depends(identity_optional),
):
    note = await get_existing_note(note_id, store)
    password = unlockNote.password if unlockNote is not None else None

    return view_response(access.evaluate(note, identity, password))


@router_notes.put(
    "/{note_id}",
    description="Accepts partial note object and bearer token. Only the owner may update",
    summary="Update note",
)
async def update_note(
    note_id: str,
    updateNote: UpdateNoteSchema,
    store: noteStoreDep,
    identity: IdentitySchema = Depends(identity_required),
):
    note = await get_existing_note(note_id, store)
    access.require_owner(note, identity)

    # Blank titles are ignored rather than rejected
    title = sanitize_title(updateNote.title or "")
    if title:
        note.title = title
    if updateNote.content is not None:
        note.content = sanitize_content(updateNote.content)
    if updateNote.password is not None:
        if updateNote.password.strip():
            note.set_password(hash_password(updateNote.password))
        else:
            note.clear_password()
    note.updated_at = utcnow()

    await store.save(note)

    return {"success": True, "data": note.to_public().to_json()}


@router_notes.delete(
    "/{note_id}",
    description="Accepts bearer token. Only the owner may delete; the short link goes with the note",
    summary="Delete note",
)
async def delete_note(
    note_id: str,
    store: noteStoreDep,
    identity: IdentitySchema = Depends(identity_required),
):
    note = await get_existing_note(note_id, store)
    access.require_owner(note, identity)

    await store.delete(note.id)
    logger.info("User %s deleted note %s", identity.user_id, note_id)

    return {"success": True, "data": None}


@router_notes.put(
    "/{note_id}/password",
    description="Accepts password and bearer token. Only the owner may protect a note",
    summary="Set note password",
)
async def set_note_password(
    note_id: str,
    notePassword: NotePasswordSchema,
    store: noteStoreDep,
    identity: IdentitySchema = Depends(identity_required),
):
    note = await get_existing_note(note_id, store)
    access.require_owner(note, identity)

    note.set_password(hash_password(notePassword.password))
    note.updated_at = utcnow()
    await store.save(note)

    return {"success": True, "data": note.to_public().to_json()}


@router_notes.delete(
    "/{note_id}/password",
    description="Accepts bearer token. Only the owner may remove a note's password",
    summary="Remove note password",
)
async def remove_note_password(
    note_id: str,
    store: noteStoreDep,
    identity: IdentitySchema = Depends(identity_required),
):
    note = await get_existing_note(note_id, store)
    access.require_owner(note, identity)

    note.clear_password()
    note.updated_at = utcnow()
    await store.save(note)

    return {"success": True, "data": note.to_public().to_json()}


@router_notes.post(
    "/{note_id}/verify",
    description="Accepts optional password. Tells whether the note needs one and whether the given one is right",
    summary="Verify note password",
)
async def verify_note_password(
    note_id: str,
    store: noteStoreDep,
    verifyPassword: VerifyPasswordSchema | None = None,
):
    password = verifyPassword.password if verifyPassword is not None else None
    note_access = await PasswordGate(store).verify(note_id, password)

    if not note_access.is_password_protected:
        message = "Note is not password protected"
    elif note_access.has_access:
        message = "Password accepted"
    else:
        message = "Password required"

    return {"success": True, "data": note_access.to_json(), "message": message}
