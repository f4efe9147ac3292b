import fakeredis
import pytest
from fastapi.testclient import TestClient

from main import app
from database import rd


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def server():
    # Own server per test so no data leaks between tests
    yield fakeredis.FakeServer()


@pytest.fixture
def redis(server):
    yield fakeredis.FakeAsyncRedis(server=server, decode_responses=True)


@pytest.fixture
def sync_redis(server):
    yield fakeredis.FakeRedis(server=server, decode_responses=True)


@pytest.fixture
def tester(redis):
    app.dependency_overrides[rd.get_redis] = lambda: redis
    with TestClient(app=app) as client:
        yield client
    app.dependency_overrides.clear()


def register(tester: TestClient, username: str, password: str) -> dict:
    response = tester.post(
        url="/auth/register", json={"username": username, "password": password}
    )
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def alice(tester):
    body = register(tester, "alice", "secret1")
    yield {"id": body["user"]["id"], "headers": {"Authorization": f"Bearer {body['token']}"}}


@pytest.fixture
def bob(tester):
    body = register(tester, "bob", "secret2")
    yield {"id": body["user"]["id"], "headers": {"Authorization": f"Bearer {body['token']}"}}
