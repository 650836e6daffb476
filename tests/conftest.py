import os

os.environ["REMK_DATABASE_URL"] = "sqlite+aiosqlite:///./remk-unused.db"
os.environ["GPS_DATABASE_URL"] = "sqlite+aiosqlite:///./gps-unused.db"
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-length"
os.environ["JWT_ISSUER"] = "asktrack-tests"
os.environ["JWT_AUDIENCE"] = "asktrack-clients"
os.environ["CREATE_TABLES"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from asktrack.core.security import get_password_hash
from asktrack.db.models.device import Device
from asktrack.db.models.installer import Installer
from asktrack.db.session import GpsBase, RemkBase, get_gps_db, get_remk_db
from asktrack.main import app


async def _make_sessionmaker(path, base):
    engine = create_async_engine(f"sqlite+aiosqlite:///{path}")
    async with engine.begin() as conn:
        await conn.run_sync(base.metadata.create_all)
    return engine, sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
async def remk_sessionmaker(tmp_path):
    engine, maker = await _make_sessionmaker(tmp_path / "remk.db", RemkBase)
    yield maker
    await engine.dispose()

@pytest.fixture
async def gps_sessionmaker(tmp_path):
    engine, maker = await _make_sessionmaker(tmp_path / "gps.db", GpsBase)
    yield maker
    await engine.dispose()

@pytest.fixture
async def remk_db(remk_sessionmaker):
    async with remk_sessionmaker() as session:
        yield session

@pytest.fixture
async def gps_db(gps_sessionmaker):
    async with gps_sessionmaker() as session:
        yield session


@pytest.fixture
async def installers(remk_db):
    rows = [
        Installer(id=1, name="Ali", number="100", code="A1", password=get_password_hash("secret"),
                  type="installer", branch="NORTH", city="Riyadh"),
        Installer(id=2, name="Omar", number="200", code="B2", password=get_password_hash("hunter2"),
                  type="installer", branch="SOUTH"),
        # старая запись с паролем в открытом виде
        Installer(id=3, name="Legacy", number="300", code="C3", password="plainpass",
                  type="supervisor", branch="NORTH"),
        Installer(id=4, name="Nobranch", number="400", code="D4", password=get_password_hash("pw"),
                  type=None, branch=None),
    ]
    remk_db.add_all(rows)
    await remk_db.commit()
    return rows

@pytest.fixture
async def devices(gps_db):
    rows = [
        Device(device_id="DEV-1", group_account="NORTH", phone_number="0500000001", isinstalled=None),
        Device(device_id="DEV-2", group_account="NORTH", phone_number="0500000002", isinstalled=False),
        Device(device_id="DEV-3", group_account="NORTH", phone_number=None, isinstalled=True),
        Device(device_id="DEV-10", group_account="NORTH", phone_number="0500000010", isinstalled=None),
        Device(device_id="SOUTH-1", group_account="SOUTH", phone_number="0500000099", isinstalled=None),
    ]
    gps_db.add_all(rows)
    await gps_db.commit()
    return rows


@pytest.fixture
async def client(remk_sessionmaker, gps_sessionmaker):
    async def override_remk_db():
        async with remk_sessionmaker() as session:
            yield session

    async def override_gps_db():
        async with gps_sessionmaker() as session:
            yield session

    app.dependency_overrides[get_remk_db] = override_remk_db
    app.dependency_overrides[get_gps_db] = override_gps_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    async def _login(number, code, password):
        return await client.post(
            "/api/auth/login", json={"Int_number": number, "Int_code": code, "Int_pass": password}
        )
    return _login

@pytest.fixture
async def north_headers(login, installers):
    response = await login("100", "A1", "secret")
    return {"Authorization": f"Bearer {response.json()['token']}"}
