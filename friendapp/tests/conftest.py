import os
import sys
import tempfile
from pathlib import Path
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Configure test environment: a throwaway SQLite file instead of the Postgres service
TEST_DB = Path(tempfile.mkdtemp()) / 'friendapp_test.db'
os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{TEST_DB}'
os.environ.setdefault('JWT_SECRET', 'testsecret')

# Ensure the package root is on sys.path when pytest changes CWD to this tests dir
HERE = Path(__file__).resolve()
PKG_ROOT = HERE.parents[2]
if str(PKG_ROOT) not in sys.path:
    sys.path.insert(0, str(PKG_ROOT))

from friendapp.models import engine, Base, AsyncSessionLocal  # noqa: E402
from friendapp.models.users import User  # noqa: E402
from friendapp.auth import create_access_token  # noqa: E402
from friendapp.main import app  # noqa: E402

ALICE, BOB, CAROL = 1, 2, 3


def auth_headers(user_id: int) -> dict:
    token = create_access_token({'id': user_id})
    return {'Authorization': f'Bearer {token}'}


@pytest_asyncio.fixture
async def db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with AsyncSessionLocal() as session:
        session.add_all([
            User(id=ALICE, username='alice'),
            User(id=BOB, username='bob'),
            User(id=CAROL, username='carol'),
        ])
        await session.commit()
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    # pooled connections are bound to this test's event loop
    await engine.dispose()


@pytest_asyncio.fixture
async def client(db):
    async with AsyncClient(transport=ASGITransport(app=app), base_url='http://test') as ac:
        yield ac


@pytest.fixture
def headers():
    return auth_headers
