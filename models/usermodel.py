from datetime import datetime

from models.base import Base


class UserModel(Base):
    id: str
    username: str
    password_hash: str
    created_at: datetime
    updated_at: datetime
