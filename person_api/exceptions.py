"""
Person API - Exception Hierarchy
=================================

What:  Application-specific exceptions.
How:   Each exception carries a message and an optional context dict.
       Handlers registered in main.py turn them into HTTP responses.
Who:   Raised by services; caught by the global handlers.

Exception Hierarchy:
    PersonApiError (base)
    └── PersonNotFoundError  → 404 Not Found

    This is the only designed failure path. Any other exception (database
    connectivity, constraint violations) is not translated and ends up as a
    generic 500.
"""

from typing import Any, Dict, Optional


class PersonApiError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, not returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class PersonNotFoundError(PersonApiError):
    """
    Raised when an id-based lookup finds no person.

    When:    get, update or delete of an id that is not stored.
    HTTP:    404 Not Found, body {"status", "message", "timestamp"}

    The repository returns None for a miss; the service converts that None
    into this exception.
    """

    def __init__(
        self,
        person_id: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["person_id"] = person_id
        super().__init__(message=f"Person not found with id: {person_id}", context=ctx)
        self.person_id = person_id
