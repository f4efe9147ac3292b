from datetime import datetime

from models.base import Base
from schemas.notesschema import PublicNoteSchema, ShareableNoteSchema


class NotesModel(Base):
    """Stored note record. Only its projections ever leave the service."""

    id: str
    title: str
    content: str = ""
    is_password_protected: bool = False
    password_hash: str | None = None
    created_at: datetime
    updated_at: datetime
    short_url: str | None = None
    # Notes written before accounts existed have no owner
    user_id: str | None = None

    def set_password(self, password_hash: str) -> None:
        self.password_hash = password_hash
        self.is_password_protected = True

    def clear_password(self) -> None:
        self.password_hash = None
        self.is_password_protected = False

    @property
    def is_missing_hash(self) -> bool:
        return self.is_password_protected and not self.password_hash

    def is_owned_by(self, user_id: str | None) -> bool:
        return self.user_id is not None and user_id is not None and self.user_id == user_id

    def to_public(self, withhold_content: bool = False) -> PublicNoteSchema:
        return PublicNoteSchema(
            id=self.id,
            title=self.title,
            content="" if withhold_content else self.content,
            is_password_protected=self.is_password_protected,
            created_at=self.created_at,
            updated_at=self.updated_at,
            short_url=self.short_url,
            user_id=self.user_id,
        )

    def to_shareable(self) -> ShareableNoteSchema:
        return ShareableNoteSchema(
            id=self.id,
            title=self.title,
            content="" if self.is_password_protected else self.content,
            short_url=self.short_url or "",
            created_at=self.created_at,
            is_password_protected=self.is_password_protected,
        )
