# Middleware package init
"""
Acaia Club Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [CORS] → [Session] → [Request ID] → [Logging] → Route Handler

    - CORS outermost so preflight requests are answered before anything else
    - Session decodes the signed cookie into request.session
    - Request ID before Logging so every access line carries the id
    - Logging innermost so its duration covers only application work

Responses travel the same chain in reverse: Logging records status and
duration, Request ID adds the X-Request-ID header, Session re-signs (or
expires) the cookie.
"""
