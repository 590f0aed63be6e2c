# Routes package init
"""
Notes Service: API Routes Package
=================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - notes.py:   GET/POST/PATCH/DELETE /   (note CRUD)
    - health.py:  GET /health               (service health check)

Routes stay thin: decode the request, call the service, encode the result.
Status codes for failures come from the exception handlers in main.py.
"""
