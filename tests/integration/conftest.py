from dataclasses import dataclass

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_unit_of_work
from tests.fixtures.json_loader import TestDataLoader
from tests.utils.cookies import refresh_token_from
from tests.utils.outbox import RecordingEmailSender

ADMIN_HEADERS = {"X-Admin-API-Key": ApplicationConfig.ADMIN_API_KEY}


@pytest.fixture
def admin_headers():
    return dict(ADMIN_HEADERS)


@dataclass
class LoggedIn:
    access_token: str
    refresh_token: str


@pytest.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def outbox():
    return RecordingEmailSender()


@pytest_asyncio.fixture
async def client(db_session, outbox):
    from httpx import ASGITransport
    from src.api.app import create_app

    app = create_app(ApplicationConfig)
    app.state.email_sender = outbox

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _create_user(client, payload):
    response = await client.post("/sa/users", json=payload, headers=ADMIN_HEADERS)
    assert response.status_code == 201, response.text
    return {**payload, "id": response.json()["id"]}


@pytest_asyncio.fixture
async def alice(client, test_data):
    return await _create_user(client, test_data.user("alice"))


@pytest_asyncio.fixture
async def bob(client, test_data):
    return await _create_user(client, test_data.user("bob"))


@pytest.fixture
def login(client, test_data):
    """Log a user in from a named browser and return its token pair"""

    async def _login(user, browser="chrome") -> LoggedIn:
        response = await client.post(
            "/auth/login",
            json={"login_or_email": user["login"], "password": user["password"]},
            headers={"User-Agent": test_data.user_agent(browser)},
        )
        assert response.status_code == 200, response.text
        return LoggedIn(
            access_token=response.json()["access_token"],
            refresh_token=refresh_token_from(response),
        )

    return _login
