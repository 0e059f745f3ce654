"""Board Rules - pure construction and privacy rules for threads and replies.

Invariants:
    - Pure functions: no IO, no async, no store access
    - Public views never contain delete_password or reported (HIDDEN_FIELDS)
    - Public views are new dicts; stored documents and their reply lists are never mutated
    - A new thread's bumped_on equals its created_on
    - Summaries keep the `preview` most recent replies in chronological order

Design Decisions:
    - Reply _id generated here, not by the store: replies are sub-documents and
      the store only assigns ids to top-level documents
"""

import hmac
from datetime import datetime

from messageboard.core.domain_types import (
    Document, HIDDEN_FIELDS, ID_FIELD, THREADS_FIELD_REPLIES,
)
from messageboard.core.identifiers import generate_object_id, same_id


DELETED_TEXT = "[deleted]"

# Excludes hidden fields at the store level for thread reads.
THREAD_PROJECTION: dict[str, int] = {name: 0 for name in HIDDEN_FIELDS}


def build_thread(board: str, text: str, delete_password: str, now: datetime) -> Document:
    """New thread document, ready for insert_one (the store assigns _id)."""
    return {
        "board": board,
        "text": text,
        "created_on": now,
        "bumped_on": now,
        "reported": False,
        "delete_password": delete_password,
        THREADS_FIELD_REPLIES: [],
    }


def build_reply(text: str, delete_password: str, now: datetime) -> Document:
    """New reply sub-document with its own identifier."""
    return {
        ID_FIELD: generate_object_id(),
        "text": text,
        "created_on": now,
        "delete_password": delete_password,
        "reported": False,
    }


def strip_hidden(document: Document) -> Document:
    return {k: v for k, v in document.items() if k not in HIDDEN_FIELDS}


def public_reply(reply: Document) -> Document:
    return strip_hidden(reply)


def public_thread(thread: Document) -> Document:
    """Thread without hidden fields, every reply stripped as well."""
    view = strip_hidden(thread)
    view[THREADS_FIELD_REPLIES] = [
        public_reply(r) for r in thread.get(THREADS_FIELD_REPLIES) or []
    ]
    return view


def summarize_thread(thread: Document, preview: int) -> Document:
    """Board listing view: last `preview` replies plus the total replycount."""
    replies = thread.get(THREADS_FIELD_REPLIES) or []
    view = strip_hidden(thread)
    recent = replies[-preview:] if preview > 0 else []
    view[THREADS_FIELD_REPLIES] = [public_reply(r) for r in recent]
    view["replycount"] = len(replies)
    return view


def find_reply(thread: Document, reply_id: str) -> Document | None:
    """Reply in `thread` whose _id string-equals `reply_id`."""
    for reply in thread.get(THREADS_FIELD_REPLIES) or []:
        if same_id(reply.get(ID_FIELD), reply_id):
            return reply
    return None


def password_matches(stored: str | None, supplied: str | None) -> bool:
    """Constant-time comparison; a missing password never matches."""
    if stored is None or supplied is None:
        return False
    return hmac.compare_digest(stored.encode("utf-8"), supplied.encode("utf-8"))
