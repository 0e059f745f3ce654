"""Document Store - in-process document collections with a database-driver-shaped async API.

Invariants:
    - One DocumentCollection per name, created lazily, kept for the process lifetime
    - Insertion order is the default iteration order of every collection
    - Every stored document has a unique, immutable _id
    - Reads return shallow copies; only update_one / delete_one touch stored documents
    - No operation awaits internally: each runs to completion before another starts
    - Not-found is a value (None, matched_count=0, deleted_count=0), never an exception

Design Decisions:
    - Singleton store initialized on startup: FastAPI lifespan calls init_store(),
      routes receive it through the get_store dependency
    - Cursor holds an immutable CursorPlan and a reference to the live table;
      the table is read only when to_list() runs
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from messageboard.core.cursor import CursorPlan, project, realize_plan
from messageboard.core.domain_types import Document, DocumentId, Filter, ID_FIELD
from messageboard.core.identifiers import generate_object_id
from messageboard.core.mutator import apply_update
from messageboard.core.query_matcher import first_match_index, matches

logger = logging.getLogger(__name__)


# ─── Results ────────────────────────────────────────────────────

@dataclass(frozen=True)
class InsertOneResult:
    inserted_id: DocumentId


@dataclass(frozen=True)
class UpdateResult:
    matched_count: int


@dataclass(frozen=True)
class DeleteResult:
    deleted_count: int


# ─── Cursor ─────────────────────────────────────────────────────

class Cursor:
    """Chainable read plan over one collection. Realizes once."""

    def __init__(self, documents: list[Document], plan: CursorPlan):
        self._documents = documents
        self._plan = plan
        self._exhausted = False

    def sort(self, spec: Mapping[str, int]) -> "Cursor":
        self._plan = self._plan.with_sort(spec)
        return self

    def limit(self, count: int) -> "Cursor":
        self._plan = self._plan.with_limit(count)
        return self

    async def to_list(self, length: int | None = None) -> list[Document]:
        """Materialize the plan. A second call returns an empty list."""
        if self._exhausted:
            return []
        self._exhausted = True
        results = realize_plan(self._documents, self._plan)
        if length is not None and length > 0:
            results = results[:length]
        return results

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for doc in await self.to_list():
            yield doc


# ─── Collection ─────────────────────────────────────────────────

class DocumentCollection:
    """Ordered, mutable table of documents for one collection name."""

    def __init__(self, name: str):
        self.name = name
        self._documents: list[Document] = []

    async def insert_one(self, document: Document) -> InsertOneResult:
        """Assign _id when missing (written back into `document`) and append a shallow copy."""
        if document.get(ID_FIELD) is None:
            document[ID_FIELD] = generate_object_id()
        self._documents.append(dict(document))
        logger.debug(
            f"Inserted document into '{self.name}'",
            extra={"collection": self.name, "document_id": document[ID_FIELD]},
        )
        return InsertOneResult(DocumentId(str(document[ID_FIELD])))

    def find(
        self, filter: Filter | None = None,
        projection: Mapping[str, Any] | None = None,
    ) -> Cursor:
        """Lazy cursor; nothing is evaluated until to_list()."""
        return Cursor(self._documents, CursorPlan(filter=filter, projection=projection))

    async def find_one(
        self, filter: Filter | None = None,
        projection: Mapping[str, Any] | None = None,
    ) -> Document | None:
        idx = first_match_index(self._documents, filter)
        if idx is None:
            return None
        return project(self._documents[idx], projection)

    async def update_one(self, filter: Filter, update: Mapping[str, Any]) -> UpdateResult:
        idx = first_match_index(self._documents, filter)
        if idx is None:
            logger.debug(
                f"update_one matched nothing in '{self.name}'",
                extra={"collection": self.name},
            )
            return UpdateResult(matched_count=0)
        apply_update(self._documents[idx], update, filter)
        return UpdateResult(matched_count=1)

    async def delete_one(self, filter: Filter) -> DeleteResult:
        idx = first_match_index(self._documents, filter)
        if idx is None:
            return DeleteResult(deleted_count=0)
        removed = self._documents.pop(idx)
        logger.debug(
            f"Deleted document from '{self.name}'",
            extra={"collection": self.name, "document_id": removed.get(ID_FIELD)},
        )
        return DeleteResult(deleted_count=1)

    async def count_documents(self, filter: Filter | None = None) -> int:
        return sum(1 for doc in self._documents if matches(doc, filter))

    def __len__(self) -> int:
        return len(self._documents)


# ─── Store ──────────────────────────────────────────────────────

class DocumentStore:
    """Process-wide owner of all collections."""

    def __init__(self):
        self._collections: dict[str, DocumentCollection] = {}

    def collection(self, name: str) -> DocumentCollection:
        if name not in self._collections:
            logger.info(f"Creating collection '{name}'", extra={"collection": name})
            self._collections[name] = DocumentCollection(name)
        return self._collections[name]

    def __getitem__(self, name: str) -> DocumentCollection:
        return self.collection(name)

    def list_collection_names(self) -> list[str]:
        return list(self._collections.keys())

    def stats(self) -> dict[str, int]:
        """Document count per collection (for readiness probes)."""
        return {name: len(c) for name, c in self._collections.items()}


# Singleton (initialized on startup)
store: DocumentStore | None = None


def init_store() -> DocumentStore:
    global store
    if store is None:
        store = DocumentStore()
    return store


def get_store() -> DocumentStore:
    """FastAPI dependency for the document store."""
    if not store:
        raise RuntimeError("Document store not initialized")
    return store
