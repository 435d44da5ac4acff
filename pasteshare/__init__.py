"""
PasteShare Backend - Application Package Initializer
=====================================================

What: Marks the `pasteshare` directory as a Python package.
Who:  Imported by uvicorn (`pasteshare.main:app`), Alembic and pytest.

Architecture Note:
    The backend is a thin layered CRUD service:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Paste Repository)     │  ← trimming, defaults, queries
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes translate HTTP to repository calls and back; the repository
    issues exactly one statement per mutation against the `pastes` table.
"""

__version__ = "1.0.0"
