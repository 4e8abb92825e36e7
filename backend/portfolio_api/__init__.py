"""
Portfolio API — Application Package Initializer
=================================================

What: Marks the `portfolio_api` directory as a Python package.
Who:  Imported by uvicorn, Alembic, pytest, and the seed command.

Architecture Note:
    The backend is layered the same way top to bottom:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │        Services (Store Access)      │  ← Queries, validation, error mapping
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async engine built once at startup
    └─────────────────────────────────────┘

    Routes never touch SQLAlchemy directly; services never build HTTP responses.
"""

__version__ = "1.0.0"
