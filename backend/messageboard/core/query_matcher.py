"""Query Matcher - evaluates the store's restricted filter grammar against one document.

Invariants:
    - A document matches iff every filter key holds (logical AND)
    - Empty or None filter matches every document
    - A filter value of None is "no constraint", never "field does not exist"
    - Identifier fields (_id, <array>._id) compare by string form only
    - Nested keys only assert membership; they never select an element

Supported shapes:
    {"board": "b"}                    top-level equality
    {"_id": "..."}                    identifier equality
    {"replies._id": "..."}            some element of `replies` has that _id
"""

from typing import Any

from messageboard.core.domain_types import Document, Filter, ID_FIELD
from messageboard.core.identifiers import same_id


def split_nested_key(key: str) -> tuple[str, str] | None:
    """Split "<arrayField>.<subfield>" into its two parts, or None for top-level keys."""
    if "." not in key:
        return None
    array_field, _, subfield = key.partition(".")
    if not array_field or not subfield or "." in subfield:
        return None
    return array_field, subfield


def matches(document: Document, query: Filter | None) -> bool:
    """Return True when `document` satisfies every key of `query`."""
    if not query:
        return True
    for key, expected in query.items():
        if expected is None:
            continue
        if not _eval_key(document, key, expected):
            return False
    return True


def _eval_key(document: Document, key: str, expected: Any) -> bool:
    nested = split_nested_key(key)
    if nested is not None:
        array_field, subfield = nested
        return _eval_element(document.get(array_field), subfield, expected)
    if key not in document:
        return False
    return _values_equal(key, document[key], expected)


def _eval_element(container: Any, subfield: str, expected: Any) -> bool:
    """Membership: some element of the array carries `subfield == expected`."""
    if not isinstance(container, list):
        return False
    return any(
        isinstance(elem, dict)
        and subfield in elem
        and _values_equal(subfield, elem[subfield], expected)
        for elem in container
    )


def _values_equal(field: str, actual: Any, expected: Any) -> bool:
    if field == ID_FIELD:
        return same_id(actual, expected)
    return actual == expected


def first_match_index(documents: list[Document], query: Filter | None) -> int | None:
    """Index of the first matching document in insertion order, or None."""
    for idx, doc in enumerate(documents):
        if matches(doc, query):
            return idx
    return None
