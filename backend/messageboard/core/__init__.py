"""Core Layer - pure domain and query logic, no IO, no async, no FastAPI.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - Functions operate on plain dicts; the shell owns where documents live

Design Decisions:
    - Functional core separated from imperative shell (impureim sandwich)
"""
