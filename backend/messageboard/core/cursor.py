"""Cursor Plan - deferred read plan (filter → sort → limit → project) and its realization.

Invariants:
    - A plan is immutable: with_sort / with_limit return new plans
    - realize_plan never mutates the stored documents (projection works on shallow copies)
    - Stage order is fixed: filter, then stable sort, then limit, then projection
    - limit <= 0 means "no limit"
    - Projection only removes fields; flags other than 0/False are ignored

Design Decisions:
    - Plan is pure data, the async Cursor in infrastructure/ only holds a plan
      and a table reference
    - Multi-key sort applied last-key-first with Python's stable sort so the
      first key dominates and ties keep insertion order
"""

from dataclasses import dataclass, replace
from typing import Any, Mapping

from messageboard.core.domain_types import Document, Filter, SortDirection
from messageboard.core.query_matcher import matches


SortSpec = tuple[tuple[str, SortDirection], ...]


@dataclass(frozen=True)
class CursorPlan:
    """Accumulated read stages. Nothing runs until realize_plan()."""
    filter: Filter | None = None
    projection: Mapping[str, Any] | None = None
    sort: SortSpec = ()
    limit: int = 0

    def with_sort(self, spec: Mapping[str, int]) -> "CursorPlan":
        return replace(self, sort=normalize_sort(spec))

    def with_limit(self, count: int) -> "CursorPlan":
        return replace(self, limit=max(0, int(count)))


def normalize_sort(spec: Mapping[str, int]) -> SortSpec:
    """{"bumped_on": -1} -> (("bumped_on", SortDirection.DESCENDING),)."""
    return tuple(
        (key, SortDirection.DESCENDING if direction < 0 else SortDirection.ASCENDING)
        for key, direction in spec.items()
    )


def sort_documents(docs: list[Document], sort: SortSpec) -> list[Document]:
    """Stable multi-key sort. Documents missing a key sort after those that have it."""
    for key, direction in reversed(sort):
        if direction == SortDirection.DESCENDING:
            docs.sort(key=lambda d: (d.get(key) is not None, d.get(key)), reverse=True)
        else:
            docs.sort(key=lambda d: (d.get(key) is None, d.get(key)))
    return docs


def project(document: Document, projection: Mapping[str, Any] | None) -> Document:
    """Shallow copy of `document` without every field flagged 0/False."""
    out = dict(document)
    if not projection:
        return out
    for key, flag in projection.items():
        if not flag:
            out.pop(key, None)
    return out


def realize_plan(documents: list[Document], plan: CursorPlan) -> list[Document]:
    """Run the plan against a table snapshot and return projected copies."""
    candidates = [doc for doc in documents if matches(doc, plan.filter)]
    if plan.sort:
        candidates = sort_documents(candidates, plan.sort)
    if plan.limit > 0:
        candidates = candidates[:plan.limit]
    return [project(doc, plan.projection) for doc in candidates]
