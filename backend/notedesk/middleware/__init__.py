# Middleware package init
"""
NoteDesk Backend: Middleware Package
=======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request context] → [GZip] → [CORS] → Route Handler

    1. Request context (request_context.py): correlation id in a ContextVar
       and the X-Request-ID header, one access line per note operation
    2. GZip / CORS: Starlette built-ins (CORS handles preflight)
"""
