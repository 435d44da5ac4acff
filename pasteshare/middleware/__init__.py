# Middleware package init
"""
PasteShare Backend - Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: generate (or accept) a correlation ID
    2. Logging: log method, path, status and duration with that ID
    3. GZip / CORS: FastAPI's built-in middleware

    The order is reversed for responses, so the request ID header is
    present on every response and the logged duration covers the handler.
"""
