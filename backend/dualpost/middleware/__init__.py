# Middleware package init
"""
DualPost Backend — Middleware Package
======================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: Generate correlation ID for logging and tracing
    2. Logging: Log request details with the generated request ID
    3. CORS: Applied by FastAPI's CORSMiddleware (handles preflight)

    Responses travel back through the same chain in reverse, which is how the
    request ID header and the logged status/duration get attached.
"""
