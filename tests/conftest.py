"""Configuration pytest / pytest configuration.

Base SQLite temporaire et rate limiting coupe avant l'import de l'application.
Temporary SQLite database and rate limiting off before the app is imported.
"""

import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="gpx7-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/test.db"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

import gpx7.models  # noqa: E402,F401
from gpx7.database import Base, engine  # noqa: E402
from gpx7.main import app  # noqa: E402


@pytest.fixture
async def client():
    # Base vide pour chaque test / Empty database for every test
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
