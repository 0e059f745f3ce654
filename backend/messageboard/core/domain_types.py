"""Domain Types - named types and enums shared by the store and the board domain.

Invariants:
    - DocumentId is a 24-char hex str - compared by exact string equality only
    - Document is a plain dict; unknown fields pass through untouched
    - All operator and outcome vocabularies encoded as Enums - no raw string matching

Design Decisions:
    - NewType over wrapper classes: zero runtime cost, identifiers stay plain str
    - str Enums: serialize to JSON and compare equal to the raw operator keys
"""

from enum import Enum, IntEnum
from typing import Any, NewType


# ─── Identity Types ──────────────────────────────────────────────

DocumentId = NewType("DocumentId", str)

Document = dict[str, Any]
Filter = dict[str, Any]

ID_FIELD = "_id"
ID_LENGTH = 24


# ─── Enums ───────────────────────────────────────────────────────

class UpdateOperator(str, Enum):
    """Update operators understood by the mutator. Anything else is ignored."""
    SET = "$set"
    PUSH = "$push"


class SortDirection(IntEnum):
    """Cursor sort directions, same integers a document database accepts."""
    ASCENDING = 1
    DESCENDING = -1


class ActionOutcome(str, Enum):
    """Plain-text results returned by board write actions."""
    SUCCESS = "success"
    INCORRECT_PASSWORD = "incorrect password"
    REPORTED = "reported"


# ─── Board field names ───────────────────────────────────────────

THREADS_FIELD_REPLIES = "replies"
HIDDEN_FIELDS: tuple[str, ...] = ("delete_password", "reported")
