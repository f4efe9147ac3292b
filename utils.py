import secrets
import string
from datetime import datetime, timezone

from pwdlib import PasswordHash
from pwdlib.hashers.argon2 import Argon2Hasher
from pwdlib.hashers.bcrypt import BcryptHasher

from constants import TITLE_MAX_LENGTH, CONTENT_MAX_LENGTH, ID_LENGTH, SHORT_URL_LENGTH

ALPHABET = string.ascii_letters + string.digits

# New hashes are argon2, bcrypt is still accepted for hashes written before
hasher = PasswordHash((Argon2Hasher(), BcryptHasher()))


def generate_token(length: int) -> str:
    return "".join(secrets.choice(ALPHABET) for _ in range(length))


def generate_id() -> str:
    return generate_token(ID_LENGTH)


def generate_short_url() -> str:
    return generate_token(SHORT_URL_LENGTH)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def sanitize_title(title: str) -> str:
    return title.strip()[:TITLE_MAX_LENGTH]


def sanitize_content(content: str) -> str:
    return content[:CONTENT_MAX_LENGTH]


def hash_password(password: str) -> str:
    return hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return hasher.verify(password, password_hash)
