"""Infrastructure Layer - the in-process document store and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Store implements the Protocols declared in core/repository_protocols.py
"""
