from datetime import datetime

from pydantic import Field

from models.base import Base
from constants import NOTE_PASSWORD_MIN_LENGTH, NOTE_PASSWORD_MAX_LENGTH


class CreateNoteSchema(Base):
    title: str = Field(min_length=1)
    content: str = ""
    password: str | None = None


class UpdateNoteSchema(Base):
    title: str | None = None
    content: str | None = None
    # Blank password removes protection, absent leaves it untouched
    password: str | None = None


class NotePasswordSchema(Base):
    password: str = Field(
        min_length=NOTE_PASSWORD_MIN_LENGTH, max_length=NOTE_PASSWORD_MAX_LENGTH
    )


class VerifyPasswordSchema(Base):
    password: str | None = None


class PublicNoteSchema(Base):
    id: str
    title: str
    content: str
    is_password_protected: bool
    created_at: datetime
    updated_at: datetime
    short_url: str | None = None
    user_id: str | None = None


class ShareableNoteSchema(Base):
    id: str
    title: str
    content: str
    short_url: str
    created_at: datetime
    is_password_protected: bool


class NoteAccessSchema(Base):
    note_id: str
    has_access: bool
    is_password_protected: bool
