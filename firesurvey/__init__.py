"""
Fire Survey Backend: Application Package Initializer
====================================================

What: Marks the `firesurvey` directory as a Python package.
Who:  Imported by uvicorn (`firesurvey.main:app`), pytest, and `python -m firesurvey`.

Architecture Note:
    The backend keeps the usual layered split:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← classification, lookups, proxying
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions (SQLite file)
    └─────────────────────────────────────┘

    Routes translate HTTP into service calls; services raise exceptions from
    `firesurvey.exceptions`, which the handlers in `firesurvey.main` turn into
    status codes.
"""

__version__ = "1.0.0"
