# Middleware package init
"""
Happy Thoughts API — Middleware Package
========================================

Middleware Chain (request direction):
    [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Rate Limit:  rejects over-limit IPs before any other work
    Request ID:  assigns the correlation ID the logger and error envelopes use
    Logging:     one access line per request, after the response is known
    GZip:        compresses responses over 500 bytes
    CORS:        Starlette's CORSMiddleware, preflight handling
"""
