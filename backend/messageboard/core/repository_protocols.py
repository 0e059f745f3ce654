"""Boundary Protocols - the collection contract the board service depends on.

Invariants:
    - Services only ever see these Protocols, never the concrete store
    - Operation names and result shapes follow a document database driver
      (insert_one / find / find_one / update_one / delete_one)
    - Reads and writes are async; find() itself is sync and returns a lazy cursor

Design Decisions:
    - Protocol over ABC: structural subtyping, the in-process store needs no base class
    - Async in Protocol: completions match an external driver's contract even
      though the in-process implementation never suspends
"""

from typing import Any, Mapping, Protocol

from messageboard.core.domain_types import Document, DocumentId, Filter


class InsertOneResultLike(Protocol):
    inserted_id: DocumentId


class UpdateResultLike(Protocol):
    matched_count: int


class DeleteResultLike(Protocol):
    deleted_count: int


class CursorLike(Protocol):
    """Chainable, deferred read plan."""
    def sort(self, spec: Mapping[str, int]) -> "CursorLike": ...
    def limit(self, count: int) -> "CursorLike": ...
    async def to_list(self, length: int | None = None) -> list[Document]: ...


class CollectionLike(Protocol):
    """Contract for a named document collection - implemented by infrastructure."""
    async def insert_one(self, document: Document) -> InsertOneResultLike: ...
    def find(
        self, filter: Filter | None = None,
        projection: Mapping[str, Any] | None = None,
    ) -> CursorLike: ...
    async def find_one(
        self, filter: Filter | None = None,
        projection: Mapping[str, Any] | None = None,
    ) -> Document | None: ...
    async def update_one(
        self, filter: Filter, update: Mapping[str, Any],
    ) -> UpdateResultLike: ...
    async def delete_one(self, filter: Filter) -> DeleteResultLike: ...


class StoreLike(Protocol):
    """Contract for obtaining collections by name."""
    def collection(self, name: str) -> CollectionLike: ...
