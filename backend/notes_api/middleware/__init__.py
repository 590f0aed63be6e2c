# Middleware package init
"""
Notes Service: Middleware Package
=================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Logging: request id + access log] → Route Handler

The request id is set before the route runs, so every log line written
while handling the request carries it.
"""
