from os import environ
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


JWT_SECRET_KEY = environ.get("JWT_SECRET_KEY", "your-super-secret-key-change-in-production")
JWT_ALGORITHM = "HS256"
TOKEN_LIFETIME = timedelta(days=7)

REDIS_URL = environ.get("REDIS_URL")
HOST_REDIS = environ.get("HOST_REDIS", "localhost")
PORT_REDIS = int(environ.get("PORT_REDIS", "6379"))

CORS_ORIGINS = environ.get("CORS_ORIGINS", "http://localhost:3000").split(",")
LOG_LEVEL = environ.get("LOG_LEVEL", "INFO")

# Limits applied before anything is stored
TITLE_MAX_LENGTH = 200
CONTENT_MAX_LENGTH = 50 * 1024

USERNAME_MIN_LENGTH = 3
USER_PASSWORD_MIN_LENGTH = 6
NOTE_PASSWORD_MIN_LENGTH = 4
NOTE_PASSWORD_MAX_LENGTH = 128

ID_LENGTH = 12
SHORT_URL_LENGTH = 8
