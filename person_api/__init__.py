"""
Person API - Application Package Initializer
=============================================

What:  Marks the `person_api` directory as a Python package.
Who:   Imported by uvicorn (`person_api.main:app`), Alembic and pytest.

Architecture Note:
    The service follows a layered layout, one request flowing straight down
    and back up:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP verbs, status codes, negotiation
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← not-found rule, search fallback
    ├─────────────────────────────────────┤
    │     Repositories (Data Access)      │  ← find/save/delete/search primitives
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
