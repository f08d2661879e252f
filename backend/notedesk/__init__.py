"""
NoteDesk Backend: Application Package Initializer
==================================================

What: Marks the `notedesk` directory as a Python package.
Who:  Imported by uvicorn (`notedesk.main:app`), pytest, and `python -m notedesk`.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Validator + NoteStore)  │  ← Validation, parameter-bound SQL
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLite engine + sessions
    └─────────────────────────────────────┘

    Routes translate HTTP into calls on the NoteStore and render results or
    application errors as JSON. The NoteStore is the only component holding
    state; the validator is a pure function over the request payload.
"""

__version__ = "1.0.0"
