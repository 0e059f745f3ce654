"""Mutator - applies the restricted update grammar to one matched document, in place.

Invariants:
    - Only $set and $push are applied; unknown operators are ignored
    - $set runs before $push regardless of the update mapping's key order
    - "<array>.$.<subfield>" targets the element whose _id equals the filter's
      "<array>._id" value; without that filter key nothing is written for it
    - Any other $set key replaces or creates that top-level field
    - $push appends to the named array, creating it when absent
    - _id is never rewritten

Design Decisions:
    - Mutation in place on the stored dict: reads already hand out copies
    - Positional element re-resolved here rather than carried over from the
      matcher, keeping matches() a plain predicate
"""

import logging
from typing import Any, Mapping

from messageboard.core.domain_types import (
    Document, Filter, ID_FIELD, UpdateOperator,
)
from messageboard.core.errors import InvalidUpdateError
from messageboard.core.identifiers import same_id

logger = logging.getLogger(__name__)

POSITIONAL_MARKER = "$"
_KNOWN_OPERATORS = {op.value for op in UpdateOperator}


def apply_update(document: Document, update: Mapping[str, Any], query: Filter | None) -> None:
    """Apply `update` to `document`. `query` resolves positional array targets."""
    unknown = [op for op in update if op not in _KNOWN_OPERATORS]
    if unknown:
        logger.debug(f"Ignoring unsupported update operators: {unknown}")

    set_spec = update.get(UpdateOperator.SET.value) or {}
    for key, value in set_spec.items():
        _apply_set(document, key, value, query or {})

    push_spec = update.get(UpdateOperator.PUSH.value) or {}
    for key, value in push_spec.items():
        _apply_push(document, key, value)


def split_positional_key(key: str) -> tuple[str, str] | None:
    """Split a positional key such as replies.$.text into ("replies", "text")."""
    parts = key.split(".")
    if len(parts) != 3 or parts[1] != POSITIONAL_MARKER:
        return None
    if not parts[0] or not parts[2]:
        return None
    return parts[0], parts[2]


def _apply_set(document: Document, key: str, value: Any, query: Filter) -> None:
    positional = split_positional_key(key)
    if positional is None:
        if key == ID_FIELD:
            return
        document[key] = value
        return

    array_field, subfield = positional
    element = _resolve_element(document, array_field, query)
    if element is None:
        logger.debug(
            f"Positional $set '{key}' found no element to update",
            extra={"document_id": document.get(ID_FIELD)},
        )
        return
    element[subfield] = value


def _resolve_element(document: Document, array_field: str, query: Filter) -> dict | None:
    """Element of `array_field` whose _id equals the filter's "<array>._id" value."""
    target_id = query.get(f"{array_field}.{ID_FIELD}")
    container = document.get(array_field)
    if target_id is None or not isinstance(container, list):
        return None
    for elem in container:
        if isinstance(elem, dict) and same_id(elem.get(ID_FIELD), target_id):
            return elem
    return None


def _apply_push(document: Document, key: str, value: Any) -> None:
    current = document.get(key)
    if current is None:
        document[key] = [value]
        return
    if not isinstance(current, list):
        raise InvalidUpdateError(
            f"$push requires an array, found {type(current).__name__}", key,
        )
    current.append(value)
