"""
Digital Life Lessons API — Middleware Package
===============================================

Middleware Chain:
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

    Request ID runs first so every access-log line and error body carries the
    same correlation ID.
"""
