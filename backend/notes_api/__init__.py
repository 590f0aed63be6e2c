"""
Notes Service: Application Package
==================================

A small HTTP service exposing CRUD over notes (header, content, id) stored
in SQLite.

Architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← decode/encode JSON, status codes
    ├─────────────────────────────────────┤
    │      NoteService (Business Logic)   │  ← edit fallback, no-op detection
    ├─────────────────────────────────────┤
    │      NoteStorage (Persistence)      │  ← single-statement SQL, NotFound
    ├─────────────────────────────────────┤
    │     Models & Schemas (Data)         │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘

Each layer only knows the one below it through a narrow interface, and
translates errors into the vocabulary of the layer above.
"""

__version__ = "1.0.0"
