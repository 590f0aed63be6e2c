# Services package init
"""
Notes Service: Services Layer
=============================

What:  Business logic layer sitting between routes (HTTP) and storage.
How:   Services receive their storage at construction time and are handed
       to route handlers through FastAPI dependency injection.

Service Inventory:
    - NoteService: list/add/edit/delete, with the no-op edit check
"""
