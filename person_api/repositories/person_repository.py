"""
Person API - SQLAlchemy Person Repository
==========================================

What:  PersonRepository implemented with async SQLAlchemy.
How:   Wraps one AsyncSession (the request's session). Writes are flushed,
       never committed: the session dependency owns commit and rollback.
Who:   Built per request by the route dependency and handed to PersonService.

Query plans:
    find_all:        SELECT ... ORDER BY id [OFFSET :offset] [LIMIT :limit]
    find_by_id:      primary key lookup (identity map first)
    find_by_email:   SELECT ... WHERE email = :email ORDER BY id LIMIT 1
                     → idx_persons_email
    search_by_name:  SELECT ... WHERE lower(firstname) LIKE :f AND lower(lastname) LIKE :l
                     (each predicate only when its fragment is not None)
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from person_api.models.person import Person
from person_api.repositories.base import PersonRepository

logger = logging.getLogger(__name__)


def _contains_pattern(fragment: str) -> str:
    return f"%{fragment.lower()}%"


class SqlAlchemyPersonRepository(PersonRepository):
    """PersonRepository on top of an AsyncSession."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_all(self, offset: int = 0, limit: Optional[int] = None) -> List[Person]:
        query = select(Person).order_by(Person.id)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def find_by_id(self, person_id: int) -> Optional[Person]:
        return await self.session.get(Person, person_id)

    async def save(self, person: Person) -> Person:
        if person.id is None:
            self.session.add(person)
            saved = person
        else:
            # Full replace of the row identified by person.id
            saved = await self.session.merge(person)
        # Flush assigns the id; refresh reads back what the database stored
        await self.session.flush()
        await self.session.refresh(saved)
        logger.debug("Saved %r", saved)
        return saved

    async def delete(self, person: Person) -> None:
        # Statement-level delete: affects zero rows when the id is not stored
        await self.session.execute(delete(Person).where(Person.id == person.id))
        await self.session.flush()

    async def find_by_email(self, email: str) -> Optional[Person]:
        result = await self.session.execute(
            select(Person).where(Person.email == email).order_by(Person.id).limit(1)
        )
        return result.scalars().first()

    async def search_by_name(
        self,
        firstname: Optional[str],
        lastname: Optional[str],
    ) -> List[Person]:
        query = select(Person)
        if firstname is not None:
            query = query.where(func.lower(Person.firstname).like(_contains_pattern(firstname)))
        if lastname is not None:
            query = query.where(func.lower(Person.lastname).like(_contains_pattern(lastname)))
        result = await self.session.execute(query.order_by(Person.id))
        return list(result.scalars().all())
