# Middleware package init
"""
Inkwell Backend — Middleware Package
======================================

Middleware Chain (order matters):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Rate Limit first: abusive requests are rejected before a DB session opens
    2. Request ID: correlation id for every log line and error body
    3. Logging: method, path, status, duration, requester
    4. GZip / CORS: Starlette built-ins

Responses travel the chain in reverse, so the request id header and the
access-log line both see the final status code.
"""
