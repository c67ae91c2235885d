"""
Person API - Abstract Person Repository
========================================

What:  Abstract base class defining the data-access contract for persons.
How:   Concrete implementations inherit from PersonRepository and implement
       every method. PersonService only ever sees this interface.
Who:   Passed to PersonService's constructor; the test suite substitutes an
       in-memory implementation.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from person_api.models.person import Person


class PersonRepository(ABC):
    """
    Abstract interface for person persistence.

    Contract:
        - Lookups return None on a miss; they never raise for "not found"
        - save() inserts when the person has no id, replaces otherwise
        - Ordering of list results is ascending id (store order)
    """

    @abstractmethod
    async def find_all(self, offset: int = 0, limit: Optional[int] = None) -> List[Person]:
        """
        Return stored persons in store order.

        Args:
            offset: Number of leading rows to skip (0 = from the start).
            limit:  Maximum number of rows; None returns everything.

        Returns:
            List of persons; empty when nothing is stored (or offset is past the end).
        """
        ...

    @abstractmethod
    async def find_by_id(self, person_id: int) -> Optional[Person]:
        """Return the person with this id, or None."""
        ...

    @abstractmethod
    async def save(self, person: Person) -> Person:
        """
        Persist a person.

        Without an id the person is inserted and receives a new id and
        created_at. With an id, the stored row's fields are replaced.

        Returns:
            The persisted person, id populated.
        """
        ...

    @abstractmethod
    async def delete(self, person: Person) -> None:
        """Remove the row with this person's id. A missing row is a no-op."""
        ...

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Person]:
        """
        Exact-match lookup by email.

        Emails are not unique; with several matches the lowest id is returned.
        """
        ...

    @abstractmethod
    async def search_by_name(
        self,
        firstname: Optional[str],
        lastname: Optional[str],
    ) -> List[Person]:
        """
        Case-insensitive substring search on firstname AND lastname.

        A None fragment puts no constraint on its field; both None returns
        every person.
        """
        ...
