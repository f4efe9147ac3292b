import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from authx.exceptions import AuthXException, MissingTokenError, JWTDecodeError
from contextlib import asynccontextmanager

from constants import CORS_ORIGINS, LOG_LEVEL
from database import rd, redisDep
from errors import AppError
from endpoints.endpoints_auth import router_auth
from endpoints.endpoints_notes import router_notes
from endpoints.endpoints_short import router_short
from utils import utcnow

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


# lifespan (before yield - on start, after yield - on exit)
@asynccontextmanager
async def lifespan(
    app: FastAPI,
):
    yield
    await rd.close()


app = FastAPI(
    title="SharedNotes",
    description="Write notes, lock them with a password and share them by short link",
    summary="Notes sharing service",
    lifespan=lifespan,
    version="1.0",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"success": False, "error": message}, status_code)


@app.exception_handler(AppError)
def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("Something went wrong [%s %s]: %s", request.method, request.url.path, exc.message)
    return error_response(exc.message, exc.status_code)


@app.exception_handler(RequestValidationError)
def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return error_response("Invalid request", 400)
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid request")
    return error_response(message, 400)


@app.exception_handler(MissingTokenError)
def missing_token_error_handler(request: Request, exc: MissingTokenError):
    return error_response("Access token not found", 401)


@app.exception_handler(JWTDecodeError)
def jwt_decode_token_error_handler(request: Request, exc: JWTDecodeError):
    if "expired" in str(exc):
        return error_response("Token is expired", 401)
    else:
        return error_response("Token decode error", 401)


@app.exception_handler(AuthXException)
def authx_error_handler(request: Request, exc: AuthXException):
    return error_response("Invalid access token", 401)


@app.exception_handler(Exception)
def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Something went wrong [%s %s]", request.method, request.url.path)
    return error_response("Something went wrong, try again later", 500)


@app.get("/health", tags=["Health"], summary="Store liveness probe")
async def health(redis: redisDep):
    redis_ok = await rd.is_alive(redis)

    return JSONResponse(
        {
            "success": redis_ok,
            "data": {
                "status": "healthy" if redis_ok else "unhealthy",
                "redis": redis_ok,
                "timestamp": utcnow().isoformat(),
            },
        },
        200 if redis_ok else 503,
    )


app.include_router(router_auth)
app.include_router(router_notes)
app.include_router(router_short)
