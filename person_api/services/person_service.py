"""
Person API - Person Service (Business Logic)
=============================================

What:  Business rules for the Person resource.
How:   Composes a PersonRepository passed to the constructor.
Who:   Called by the /persons route handlers; calls the repository.
When:  Once per request; a service instance lives as long as its request.

Rules:
    - An id-based lookup that misses raises PersonNotFoundError (→ 404)
    - Updates copy firstname, lastname and email; id and created_at stay
    - search() without any name fragment returns a page of all persons;
      with a fragment it returns every match and page/size are not applied
"""

import logging
from typing import List, Optional

from person_api.exceptions import PersonNotFoundError
from person_api.models.person import Person
from person_api.repositories.base import PersonRepository

logger = logging.getLogger(__name__)


class PersonService:
    """
    Business logic layer for person operations.

    Responsibilities:
        - get_all_persons() / get_persons_page(): listing
        - get_person_by_id(): lookup with not-found handling
        - create_person() / update_person() / delete_person(): mutations
        - search(): name search with the paginated fallback

    Error Handling Strategy:
        Only "not found" is translated (into PersonNotFoundError).
        Repository and database errors propagate unchanged.
    """

    def __init__(self, repository: PersonRepository):
        self.repository = repository

    async def get_all_persons(self) -> List[Person]:
        """Every stored person, store order."""
        return await self.repository.find_all()

    async def get_persons_page(self, page: int, size: int) -> List[Person]:
        """
        Zero-indexed page of all persons.

        Args:
            page: Page number, 0 is the first page
            size: Page size

        Returns:
            Persons page*size .. page*size + size - 1 in store order; empty past the end.
        """
        return await self.repository.find_all(offset=page * size, limit=size)

    async def get_person_by_id(self, person_id: int) -> Person:
        """
        Retrieve a single person by id.

        Raises:
            PersonNotFoundError: No person with the given id (→ 404)
        """
        person = await self.repository.find_by_id(person_id)
        if person is None:
            raise PersonNotFoundError(person_id)
        return person

    async def create_person(self, person: Person) -> Person:
        """Persist a new person. Required fields are enforced by the table."""
        created = await self.repository.save(person)
        logger.info("Person created: %s", created.id)
        return created

    async def update_person(self, person_id: int, patch: Person) -> Person:
        """
        Overwrite firstname, lastname and email of a stored person.

        Args:
            person_id: Id of the person to update
            patch: Carrier of the new field values; its id and created_at are ignored

        Returns:
            The merged person, with the original id and created_at

        Raises:
            PersonNotFoundError: No person with the given id (→ 404)
        """
        person = await self.get_person_by_id(person_id)

        person.firstname = patch.firstname
        person.lastname = patch.lastname
        person.email = patch.email

        updated = await self.repository.save(person)
        logger.info("Person updated: %s", updated.id)
        return updated

    async def delete_person(self, person_id: int) -> None:
        """
        Delete a stored person.

        Raises:
            PersonNotFoundError: No person with the given id (→ 404)
        """
        person = await self.get_person_by_id(person_id)
        await self.repository.delete(person)
        logger.info("Person deleted: %s", person_id)

    async def search(
        self,
        firstname: Optional[str],
        lastname: Optional[str],
        page: int,
        size: int,
    ) -> List[Person]:
        """
        Name search with a paginated fallback.

        Both fragments None → get_persons_page(page, size).
        Otherwise → repository.search_by_name(firstname, lastname), unpaginated:
        page and size do not limit name search results.
        """
        if firstname is None and lastname is None:
            return await self.get_persons_page(page, size)
        return await self.repository.search_by_name(firstname, lastname)
