"""
Inkwell Backend — Application Package Initializer
===================================================

What:  Marks the `app` directory as a Python package.
Who:   Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    Layered the usual way:

    ┌─────────────────────────────────────┐
    │        Routes (API Layer)           │  ← HTTP concerns, post policy checks
    ├─────────────────────────────────────┤
    │   Services (Entity CRUD + Policy)   │  ← Projection, sorting, existence checks
    ├─────────────────────────────────────┤
    │     Models & Schemas (Data)         │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │     Database (Persistence)          │  ← Async SQLAlchemy sessions, retry
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
