# Middleware package init
"""
Fire Survey Backend: Middleware Package
=======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: correlation ID for logs, error bodies and the X-Request-ID header
    2. Logging: access line with status and duration
    3. CORS: Starlette's CORSMiddleware (answers preflights, stamps
       Access-Control-* headers on cross-origin responses)
"""
