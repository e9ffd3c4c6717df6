# Middleware package init
"""
Users API - Middleware Package
===============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Request ID runs first so the access log line and any error body carry the
    same correlation ID. The order is reversed for responses.
"""
