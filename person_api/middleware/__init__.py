"""
Person API - Middleware Package
================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    - Request ID first, so every log line of the request can carry it
    - Logging measures the full downstream duration and final status
    - CORS is FastAPI's CORSMiddleware (handles preflight)
"""
