"""
Person API - Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── fake_repository: In-memory PersonRepository (service tests, no database)
    ├── db_tables: Creates the schema in the SQLite test database, drops it after
    ├── db_session: AsyncSession on the test database
    ├── repository: SqlAlchemyPersonRepository on db_session
    ├── sample_person_data: Field values for one person
    ├── test_client: HTTPX AsyncClient talking to the FastAPI app
    └── error_client: test_client that answers unhandled errors with the 500
"""

import os
import tempfile

# Settings are read when person_api.config is first imported, so the
# environment is overridden before any person_api import below.
_TEST_DB_DIR = tempfile.mkdtemp(prefix="person_api_test_")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(_TEST_DB_DIR, "test.db")
os.environ["DB_CREATE_TABLES"] = "false"
os.environ["API_PREFIX"] = "/api"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from person_api.database import async_session_factory, create_tables, drop_tables
from person_api.models.person import Person
from person_api.repositories.base import PersonRepository
from person_api.repositories.person_repository import SqlAlchemyPersonRepository


# ══════════════════════════════════════════════════════════════════════════
# In-Memory Repository
# ══════════════════════════════════════════════════════════════════════════


class FakePersonRepository(PersonRepository):
    """
    PersonRepository backed by a dict.

    Mirrors the SQL implementation: ids count up from 1, created_at is
    stamped on first save, lists come back in id order.
    """

    def __init__(self):
        self.rows: Dict[int, Person] = {}
        self._next_id = 1

    async def find_all(self, offset: int = 0, limit: Optional[int] = None) -> List[Person]:
        persons = [self.rows[key] for key in sorted(self.rows)]
        end = None if limit is None else offset + limit
        return persons[offset:end]

    async def find_by_id(self, person_id: int) -> Optional[Person]:
        return self.rows.get(person_id)

    async def save(self, person: Person) -> Person:
        if person.id is None:
            person.id = self._next_id
            self._next_id += 1
        if person.created_at is None:
            person.created_at = datetime.now(timezone.utc)
        self.rows[person.id] = person
        return person

    async def delete(self, person: Person) -> None:
        self.rows.pop(person.id, None)

    async def find_by_email(self, email: str) -> Optional[Person]:
        for key in sorted(self.rows):
            if self.rows[key].email == email:
                return self.rows[key]
        return None

    async def search_by_name(
        self,
        firstname: Optional[str],
        lastname: Optional[str],
    ) -> List[Person]:
        def matches(value: str, fragment: Optional[str]) -> bool:
            return fragment is None or fragment.lower() in value.lower()

        return [
            self.rows[key]
            for key in sorted(self.rows)
            if matches(self.rows[key].firstname, firstname)
            and matches(self.rows[key].lastname, lastname)
        ]


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════


@pytest.fixture
def fake_repository():
    """Fresh in-memory repository for each test."""
    return FakePersonRepository()


@pytest.fixture
def sample_person_data():
    """Field values for creating a Person."""
    return {
        "firstname": "Max",
        "lastname": "Mustermann",
        "email": "max@example.com",
    }


@pytest_asyncio.fixture
async def db_tables():
    """
    Creates the schema in the SQLite test database and drops it afterwards,
    so every test starts from an empty persons table with ids from 1.
    """
    await create_tables()
    yield
    await drop_tables()


@pytest_asyncio.fixture
async def db_session(db_tables):
    """AsyncSession on the test database; uncommitted work is rolled back."""
    async with async_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def repository(db_session):
    """SqlAlchemyPersonRepository on the test session."""
    return SqlAlchemyPersonRepository(db_session)


@pytest_asyncio.fixture
async def test_client(db_tables):
    """
    Provides an async HTTP test client for endpoint testing.

    Uses ASGITransport to route requests directly to the app; every request
    gets its own session and transaction, exactly as under uvicorn.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/persons")
            assert response.status_code == 200
    """
    from person_api.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def error_client(db_tables):
    """
    Like test_client, but unhandled exceptions come back as the app's 500
    response instead of being re-raised into the test.
    """
    from person_api.main import app
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
