"""
Person API - Repositories Layer
================================

What:  Typed data access over the `persons` table.
How:   PersonRepository (abstract) declares the primitives the service needs;
       SqlAlchemyPersonRepository implements them on an AsyncSession.

Repository Inventory:
    - PersonRepository (abstract): find_all, find_by_id, save, delete,
      find_by_email, search_by_name
    - SqlAlchemyPersonRepository: async SQLAlchemy implementation
"""

from person_api.repositories.base import PersonRepository
from person_api.repositories.person_repository import SqlAlchemyPersonRepository

__all__ = ["PersonRepository", "SqlAlchemyPersonRepository"]
