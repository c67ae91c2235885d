"""
Person API - SQLAlchemy Repository Tests
=========================================

What:  Tests for SqlAlchemyPersonRepository against a real SQLite database.
How:   aiosqlite test database from conftest; schema created and dropped per test.

What we test:
    ✅ save() inserts (id + created_at) and replaces by identity
    ✅ find_all() ordering, offset and limit
    ✅ find_by_id() / find_by_email() misses return None
    ✅ find_by_email() with duplicate emails returns the lowest id
    ✅ delete() removes the row; unknown ids are a no-op
    ✅ search_by_name() case-insensitive substring, None as wildcard, AND
"""

import pytest

from person_api.database import async_session_factory
from person_api.models.person import Person
from person_api.repositories.person_repository import SqlAlchemyPersonRepository


async def _seed(repository, *names):
    return [
        await repository.save(Person(firstname=first, lastname=last))
        for first, last in names
    ]


class TestSave:
    """Tests for insert and replace."""

    @pytest.mark.asyncio
    async def test_save_new_person_assigns_id_and_created_at(self, repository, sample_person_data):
        """Insert populates id and created_at."""
        saved = await repository.save(Person(**sample_person_data))

        assert saved.id == 1
        assert saved.created_at is not None
        assert saved.email == "max@example.com"

    @pytest.mark.asyncio
    async def test_ids_are_unique_and_increasing(self, repository):
        """Every insert gets a fresh id."""
        persons = await _seed(repository, ("A", "A"), ("B", "B"), ("C", "C"))
        assert [p.id for p in persons] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_save_with_identity_replaces_fields(self, repository, db_session, sample_person_data):
        """Saving a person carrying an existing id updates that row."""
        saved = await repository.save(Person(**sample_person_data))
        created_at = saved.created_at
        await db_session.commit()

        replaced = await repository.save(
            Person(id=saved.id, firstname="Erika", lastname="Musterfrau", email=None)
        )

        assert replaced.id == saved.id
        assert replaced.firstname == "Erika"
        assert replaced.email is None
        assert replaced.created_at == created_at
        assert len(await repository.find_all()) == 1

    @pytest.mark.asyncio
    async def test_saved_person_is_visible_after_commit(self, repository, db_session, sample_person_data):
        """A committed insert is readable from a new session."""
        saved = await repository.save(Person(**sample_person_data))
        await db_session.commit()

        async with async_session_factory() as other:
            found = await SqlAlchemyPersonRepository(other).find_by_id(saved.id)

        assert found is not None
        assert (found.firstname, found.lastname) == ("Max", "Mustermann")
        assert found.created_at == saved.created_at


class TestFind:
    """Tests for find_all, find_by_id and find_by_email."""

    @pytest.mark.asyncio
    async def test_find_all_empty(self, repository):
        assert await repository.find_all() == []

    @pytest.mark.asyncio
    async def test_find_all_offset_and_limit(self, repository):
        """offset/limit slice the id-ordered list."""
        await _seed(repository, *[(f"P{i}", "X") for i in range(7)])

        assert [p.id for p in await repository.find_all()] == [1, 2, 3, 4, 5, 6, 7]
        assert [p.id for p in await repository.find_all(offset=3, limit=2)] == [4, 5]
        assert [p.id for p in await repository.find_all(offset=6, limit=5)] == [7]
        assert await repository.find_all(offset=10, limit=5) == []

    @pytest.mark.asyncio
    async def test_find_by_id_miss_returns_none(self, repository):
        assert await repository.find_by_id(12345) is None

    @pytest.mark.asyncio
    async def test_find_by_email_exact_match(self, repository):
        """Lookup by email is an exact match."""
        await repository.save(Person(firstname="Max", lastname="M", email="max@example.com"))

        found = await repository.find_by_email("max@example.com")

        assert found is not None
        assert found.firstname == "Max"
        assert await repository.find_by_email("MAX@example.com") is None
        assert await repository.find_by_email("max@example") is None

    @pytest.mark.asyncio
    async def test_find_by_email_duplicates_returns_lowest_id(self, repository):
        """Emails are not unique; the first stored match wins."""
        first = await repository.save(Person(firstname="A", lastname="A", email="shared@example.com"))
        await repository.save(Person(firstname="B", lastname="B", email="shared@example.com"))

        found = await repository.find_by_email("shared@example.com")

        assert found.id == first.id


class TestDelete:
    """Tests for delete."""

    @pytest.mark.asyncio
    async def test_delete_removes_row(self, repository, db_session):
        person, other = await _seed(repository, ("Max", "M"), ("Anna", "S"))
        await db_session.commit()

        await repository.delete(person)
        await db_session.commit()

        async with async_session_factory() as fresh:
            remaining = await SqlAlchemyPersonRepository(fresh).find_all()
        assert [p.id for p in remaining] == [other.id]

    @pytest.mark.asyncio
    async def test_delete_unknown_is_noop(self, repository):
        """Deleting an id that is not stored changes nothing and does not raise."""
        await _seed(repository, ("Max", "M"))

        await repository.delete(Person(id=999, firstname="Ghost", lastname="G"))

        assert len(await repository.find_all()) == 1


class TestSearchByName:
    """Tests for search_by_name."""

    @pytest.mark.asyncio
    async def test_firstname_fragment_case_insensitive(self, repository):
        await _seed(repository, ("Max", "Mustermann"), ("Anna", "Schmidt"), ("Maximilian", "Huber"))

        result = await repository.search_by_name("MAX", None)

        assert [p.firstname for p in result] == ["Max", "Maximilian"]

    @pytest.mark.asyncio
    async def test_lastname_fragment_substring(self, repository):
        await _seed(repository, ("Max", "Mustermann"), ("Anna", "Schmidt"))

        result = await repository.search_by_name(None, "MIDT")

        assert [p.lastname for p in result] == ["Schmidt"]

    @pytest.mark.asyncio
    async def test_both_fragments_are_anded(self, repository):
        await _seed(repository, ("Max", "Mustermann"), ("Max", "Schmidt"), ("Anna", "Schmidt"))

        result = await repository.search_by_name("max", "schmidt")

        assert [(p.firstname, p.lastname) for p in result] == [("Max", "Schmidt")]

    @pytest.mark.asyncio
    async def test_both_none_returns_everything(self, repository):
        await _seed(repository, ("Max", "Mustermann"), ("Anna", "Schmidt"))
        assert len(await repository.search_by_name(None, None)) == 2

    @pytest.mark.asyncio
    async def test_empty_fragment_matches_everything(self, repository):
        await _seed(repository, ("Max", "Mustermann"), ("Anna", "Schmidt"))
        assert len(await repository.search_by_name("", None)) == 2

    @pytest.mark.asyncio
    async def test_no_match_returns_empty_list(self, repository):
        await _seed(repository, ("Max", "Mustermann"))
        assert await repository.search_by_name("zoe", None) == []
