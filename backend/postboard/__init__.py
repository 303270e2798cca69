"""
Postboard Backend — Application Package Initializer
===================================================

What: Marks the `postboard` directory as a Python package.
Who:  Used by uvicorn (postboard.main:app), Alembic and pytest.

Architecture Note:
    The backend is split into thin layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← ID parsing, not-found, error wrapping
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Lazily created async engine
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
