import os

os.environ["SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import tracker.models  # noqa: F401
from tracker.core.database import Base, get_async_session
from tracker.main import app

BASE_URL = "http://test"
API = "/api/v1"
PASSWORD = "correct horse battery staple"


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def transport(session_factory):
    async def override_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_session
    yield httpx.ASGITransport(app=app)
    app.dependency_overrides.clear()


@pytest.fixture
async def make_client(transport):
    clients = []

    def _make() -> httpx.AsyncClient:
        client = httpx.AsyncClient(transport=transport, base_url=BASE_URL)
        clients.append(client)
        return client

    yield _make
    for client in clients:
        await client.aclose()


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def register(client):
    async def _register(username: str, email: str = None, password: str = PASSWORD) -> httpx.Response:
        email = email or f"{username}@mail.com"
        return await client.post(
            f"{API}/users/register",
            json={"username": username, "email": email, "password": password},
        )

    return _register


@pytest.fixture
def logged_in(make_client):
    """Factory returning a client whose cookie jar holds a fresh session for ``username``."""

    async def _logged_in(username: str, password: str = PASSWORD) -> httpx.AsyncClient:
        client = make_client()
        resp = await client.post(
            f"{API}/users/register",
            json={"username": username, "email": f"{username}@mail.com", "password": password},
        )
        assert resp.status_code == 201, resp.text
        resp = await client.post(
            f"{API}/users/login",
            json={"email": f"{username}@mail.com", "password": password},
        )
        assert resp.status_code == 200, resp.text
        return client

    return _logged_in
