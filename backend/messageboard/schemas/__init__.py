"""Pydantic Schemas - request validation for the board API.

Invariants:
    - Schemas validate at the system boundary; the store never validates document shape
"""
