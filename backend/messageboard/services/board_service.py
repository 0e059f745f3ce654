"""Board Service - thread and reply use cases over one threads collection.

Invariants:
    - Every store call goes through the CollectionLike protocol (no concrete store import)
    - Thread lookups are always scoped by board as well as _id
    - Missing thread or reply raises ResourceNotFoundError; a wrong password is an
      ActionOutcome, not an error
    - Posting a reply bumps the thread's bumped_on to the reply's created_on
    - Deleting a reply keeps it in place with its text replaced by DELETED_TEXT

Design Decisions:
    - Impureim sandwich: core/board_rules.py builds and strips documents,
      this module only sequences the store calls
    - Injectable clock so tests control bump ordering
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from messageboard.core.board_rules import (
    DELETED_TEXT, THREAD_PROJECTION,
    build_reply, build_thread, find_reply, password_matches,
    public_thread, summarize_thread,
)
from messageboard.core.domain_types import (
    ActionOutcome, Document, DocumentId, ID_FIELD, SortDirection,
    THREADS_FIELD_REPLIES,
)
from messageboard.core.errors import ErrorContext, ResourceNotFoundError
from messageboard.core.repository_protocols import CollectionLike

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BoardService:
    """Thread/reply operations for all boards stored in one collection."""

    def __init__(
        self,
        threads: CollectionLike,
        page_size: int = 10,
        preview_size: int = 3,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._threads = threads
        self._page_size = page_size
        self._preview_size = preview_size
        self._clock = clock

    # ─── Threads ────────────────────────────────────────────────

    async def create_thread(
        self, board: str, text: str, delete_password: str,
    ) -> DocumentId:
        thread = build_thread(board, text, delete_password, self._clock())
        result = await self._threads.insert_one(thread)
        logger.info(
            "Thread created",
            extra={"board": board, "thread_id": result.inserted_id},
        )
        return result.inserted_id

    async def list_threads(self, board: str) -> list[Document]:
        """Most recently bumped threads, each with its latest replies."""
        threads = await (
            self._threads.find({"board": board}, THREAD_PROJECTION)
            .sort({"bumped_on": SortDirection.DESCENDING})
            .limit(self._page_size)
            .to_list()
        )
        return [summarize_thread(t, self._preview_size) for t in threads]

    async def get_thread(self, board: str, thread_id: str) -> Document:
        """Single thread with every reply, hidden fields stripped."""
        thread = await self._threads.find_one(
            {ID_FIELD: thread_id, "board": board}, THREAD_PROJECTION,
        )
        if thread is None:
            raise _thread_not_found(board, thread_id)
        return public_thread(thread)

    async def report_thread(self, board: str, thread_id: str) -> ActionOutcome:
        result = await self._threads.update_one(
            {ID_FIELD: thread_id, "board": board},
            {"$set": {"reported": True}},
        )
        if result.matched_count == 0:
            raise _thread_not_found(board, thread_id)
        logger.info(
            "Thread reported", extra={"board": board, "thread_id": thread_id},
        )
        return ActionOutcome.REPORTED

    async def delete_thread(
        self, board: str, thread_id: str, delete_password: str,
    ) -> ActionOutcome:
        thread = await self._threads.find_one({ID_FIELD: thread_id, "board": board})
        if thread is None:
            raise _thread_not_found(board, thread_id)
        if not password_matches(thread.get("delete_password"), delete_password):
            return ActionOutcome.INCORRECT_PASSWORD
        await self._threads.delete_one({ID_FIELD: thread_id, "board": board})
        logger.info(
            "Thread deleted", extra={"board": board, "thread_id": thread_id},
        )
        return ActionOutcome.SUCCESS

    # ─── Replies ────────────────────────────────────────────────

    async def create_reply(
        self, board: str, thread_id: str, text: str, delete_password: str,
    ) -> DocumentId:
        reply = build_reply(text, delete_password, self._clock())
        result = await self._threads.update_one(
            {ID_FIELD: thread_id, "board": board},
            {
                "$set": {"bumped_on": reply["created_on"]},
                "$push": {THREADS_FIELD_REPLIES: reply},
            },
        )
        if result.matched_count == 0:
            raise _thread_not_found(board, thread_id)
        logger.info(
            "Reply created",
            extra={"board": board, "thread_id": thread_id, "reply_id": reply[ID_FIELD]},
        )
        return reply[ID_FIELD]

    async def report_reply(
        self, board: str, thread_id: str, reply_id: str,
    ) -> ActionOutcome:
        result = await self._threads.update_one(
            {ID_FIELD: thread_id, "board": board, "replies._id": reply_id},
            {"$set": {"replies.$.reported": True}},
        )
        if result.matched_count == 0:
            raise _reply_not_found(board, thread_id, reply_id)
        logger.info(
            "Reply reported",
            extra={"board": board, "thread_id": thread_id, "reply_id": reply_id},
        )
        return ActionOutcome.SUCCESS

    async def delete_reply(
        self, board: str, thread_id: str, reply_id: str, delete_password: str,
    ) -> ActionOutcome:
        thread = await self._threads.find_one({ID_FIELD: thread_id, "board": board})
        if thread is None:
            raise _thread_not_found(board, thread_id)
        reply = find_reply(thread, reply_id)
        if reply is None:
            raise _reply_not_found(board, thread_id, reply_id)
        if not password_matches(reply.get("delete_password"), delete_password):
            return ActionOutcome.INCORRECT_PASSWORD
        await self._threads.update_one(
            {ID_FIELD: thread_id, "board": board, "replies._id": reply_id},
            {"$set": {"replies.$.text": DELETED_TEXT}},
        )
        logger.info(
            "Reply deleted",
            extra={"board": board, "thread_id": thread_id, "reply_id": reply_id},
        )
        return ActionOutcome.SUCCESS


def _thread_not_found(board: str, thread_id: str) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        "Thread", thread_id, ErrorContext(board=board, thread_id=thread_id),
    )


def _reply_not_found(board: str, thread_id: str, reply_id: str) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        "Reply", reply_id,
        ErrorContext(board=board, thread_id=thread_id, reply_id=reply_id),
    )
