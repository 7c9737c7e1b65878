# Middleware package init
"""
DayNotes Backend — Middleware Package
=======================================

Middleware Chain (request direction):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

Request ID runs first so the access log line carries the correlation ID.
"""
