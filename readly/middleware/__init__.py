"""
Readly Backend: Middleware Package
===================================

Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Tracing: request ID, access log, last-resort 500] → [GZip] → [CORS] → Route Handler
"""
