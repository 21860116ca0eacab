# Middleware package init
"""
Developer Registry — Middleware Package
=========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: assigns the correlation ID used in every log line
    2. Logging: records method, path, status and duration
"""
