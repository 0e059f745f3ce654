"""Board Service - thread and reply use cases over an in-process collection.

Invariants:
    - Listing shows at most 10 threads, most recently bumped first, 3 replies each
    - Replies bump their thread
    - Wrong passwords return INCORRECT_PASSWORD and change nothing
    - Unknown threads/replies raise ResourceNotFoundError
"""

import pytest

from messageboard.core.board_rules import DELETED_TEXT
from messageboard.core.domain_types import ActionOutcome
from messageboard.core.errors import ResourceNotFoundError


async def test_create_thread_stores_private_fields(service, threads):
    """Stored threads keep password and report flag, with created_on == bumped_on."""
    thread_id = await service.create_thread("b", "hello", "pw")
    stored = await threads.find_one({"_id": thread_id})
    assert stored["delete_password"] == "pw"
    assert stored["reported"] is False
    assert stored["created_on"] == stored["bumped_on"]


async def test_list_threads_hides_private_fields(service):
    """Listed threads expose no hidden fields and report a replycount."""
    await service.create_thread("b", "hello", "pw")
    [thread] = await service.list_threads("b")
    assert "delete_password" not in thread
    assert "reported" not in thread
    assert thread["replies"] == []
    assert thread["replycount"] == 0


async def test_list_threads_scoped_to_board(service):
    """Listing only returns threads from the requested board."""
    await service.create_thread("a", "in a", "pw")
    await service.create_thread("b", "in b", "pw")
    listed = await service.list_threads("a")
    assert [t["text"] for t in listed] == ["in a"]


async def test_list_threads_newest_first_and_limited(service):
    """Listing returns the 10 most recently bumped threads, newest first."""
    for i in range(12):
        await service.create_thread("b", f"thread {i}", "pw")
    listed = await service.list_threads("b")
    assert len(listed) == 10
    assert listed[0]["text"] == "thread 11"
    assert listed[-1]["text"] == "thread 2"


async def test_reply_bumps_thread_to_top(service):
    """A reply moves its thread to the top with bumped_on set to the reply time."""
    old = await service.create_thread("b", "old", "pw")
    await service.create_thread("b", "new", "pw")
    await service.create_reply("b", old, "bump", "rpw")
    listed = await service.list_threads("b")
    assert [t["text"] for t in listed] == ["old", "new"]
    assert listed[0]["bumped_on"] == listed[0]["replies"][0]["created_on"]


async def test_list_threads_shows_latest_three_replies(service):
    """Listings include only the 3 latest replies, stripped of hidden fields."""
    thread_id = await service.create_thread("b", "t", "pw")
    for i in range(5):
        await service.create_reply("b", thread_id, f"r{i}", "rpw")
    [thread] = await service.list_threads("b")
    assert [r["text"] for r in thread["replies"]] == ["r2", "r3", "r4"]
    assert thread["replycount"] == 5
    for reply in thread["replies"]:
        assert "delete_password" not in reply
        assert "reported" not in reply


async def test_get_thread_returns_all_replies(service):
    """Viewing a thread returns every reply without hidden fields."""
    thread_id = await service.create_thread("b", "t", "pw")
    for i in range(5):
        await service.create_reply("b", thread_id, f"r{i}", "rpw")
    thread = await service.get_thread("b", thread_id)
    assert len(thread["replies"]) == 5
    assert "delete_password" not in thread
    assert "delete_password" not in thread["replies"][0]


async def test_get_thread_wrong_board_not_found(service):
    """A thread is not visible through another board."""
    thread_id = await service.create_thread("a", "t", "pw")
    with pytest.raises(ResourceNotFoundError):
        await service.get_thread("b", thread_id)


async def test_report_thread(service, threads):
    """Reporting a thread sets its reported flag."""
    thread_id = await service.create_thread("b", "t", "pw")
    assert await service.report_thread("b", thread_id) == ActionOutcome.REPORTED
    assert (await threads.find_one({"_id": thread_id}))["reported"] is True


async def test_report_missing_thread_raises(service):
    """Reporting an unknown thread raises with the id in the context."""
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await service.report_thread("b", "nonexistent")
    assert exc_info.value.context.thread_id == "nonexistent"


async def test_delete_thread_wrong_password_keeps_thread(service, threads):
    """A wrong password leaves the thread in place."""
    thread_id = await service.create_thread("b", "t", "pw")
    outcome = await service.delete_thread("b", thread_id, "wrong")
    assert outcome == ActionOutcome.INCORRECT_PASSWORD
    assert await threads.find_one({"_id": thread_id}) is not None


async def test_delete_thread_correct_password(service, threads):
    """The right password removes the thread."""
    thread_id = await service.create_thread("b", "t", "pw")
    assert await service.delete_thread("b", thread_id, "pw") == ActionOutcome.SUCCESS
    assert await threads.find_one({"_id": thread_id}) is None


async def test_create_reply_on_missing_thread_raises(service):
    """Replying to an unknown thread raises ResourceNotFoundError."""
    with pytest.raises(ResourceNotFoundError):
        await service.create_reply("b", "nonexistent", "x", "pw")


async def test_report_reply_marks_only_that_reply(service, threads):
    """Reporting one reply leaves its siblings unflagged."""
    thread_id = await service.create_thread("b", "t", "pw")
    first = await service.create_reply("b", thread_id, "one", "rpw")
    second = await service.create_reply("b", thread_id, "two", "rpw")
    assert await service.report_reply("b", thread_id, second) == ActionOutcome.SUCCESS
    stored = await threads.find_one({"_id": thread_id})
    flags = {r["_id"]: r["reported"] for r in stored["replies"]}
    assert flags == {first: False, second: True}


async def test_report_missing_reply_raises(service):
    """Reporting an unknown reply raises ResourceNotFoundError."""
    thread_id = await service.create_thread("b", "t", "pw")
    with pytest.raises(ResourceNotFoundError):
        await service.report_reply("b", thread_id, "nonexistent")


async def test_delete_reply_wrong_password(service, threads):
    """A wrong reply password keeps the reply text."""
    thread_id = await service.create_thread("b", "t", "pw")
    reply_id = await service.create_reply("b", thread_id, "keep me", "rpw")
    outcome = await service.delete_reply("b", thread_id, reply_id, "wrong")
    assert outcome == ActionOutcome.INCORRECT_PASSWORD
    stored = await threads.find_one({"_id": thread_id})
    assert stored["replies"][0]["text"] == "keep me"


async def test_delete_reply_replaces_text(service):
    """Deleting a reply keeps it in place with text "[deleted]"."""
    thread_id = await service.create_thread("b", "t", "pw")
    reply_id = await service.create_reply("b", thread_id, "bye", "rpw")
    assert await service.delete_reply("b", thread_id, reply_id, "rpw") == ActionOutcome.SUCCESS
    thread = await service.get_thread("b", thread_id)
    assert thread["replies"][0]["text"] == DELETED_TEXT
    assert thread["replies"][0]["_id"] == reply_id


async def test_delete_missing_reply_raises(service):
    """Deleting an unknown reply raises ResourceNotFoundError."""
    thread_id = await service.create_thread("b", "t", "pw")
    with pytest.raises(ResourceNotFoundError):
        await service.delete_reply("b", thread_id, "nonexistent", "pw")


async def test_report_reply_through_other_board_raises(service, threads):
    """Reporting a reply via a board the thread is not on is a 404 and flags nothing."""
    thread_id = await service.create_thread("a", "t", "pw")
    reply_id = await service.create_reply("a", thread_id, "r", "rpw")
    with pytest.raises(ResourceNotFoundError):
        await service.report_reply("b", thread_id, reply_id)
    stored = await threads.find_one({"_id": thread_id})
    assert stored["replies"][0]["reported"] is False


async def test_delete_thread_through_other_board_raises(service, threads):
    """A thread is only deletable through the board it was posted on."""
    thread_id = await service.create_thread("a", "t", "pw")
    with pytest.raises(ResourceNotFoundError):
        await service.delete_thread("b", thread_id, "pw")
    assert await threads.count_documents({"_id": thread_id}) == 1
