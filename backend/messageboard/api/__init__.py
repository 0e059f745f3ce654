"""API Layer - FastAPI routes, middleware, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes delegate to BoardService; no store calls in route bodies
"""
