"""Board Rules - pure construction and privacy views for threads and replies."""

from datetime import datetime, timezone

from messageboard.core.board_rules import (
    THREAD_PROJECTION, build_reply, build_thread, find_reply,
    password_matches, public_thread, summarize_thread,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _thread_with_replies(n: int) -> dict:
    thread = build_thread("b", "text", "pw", NOW)
    thread["_id"] = "t1"
    thread["replies"] = [
        {"_id": f"r{i}", "text": f"reply {i}", "created_on": NOW,
         "delete_password": "rpw", "reported": False}
        for i in range(n)
    ]
    return thread


def test_build_thread_defaults():
    """New threads start unreported, unbumped and without replies or an id."""
    thread = build_thread("general", "hello", "secret", NOW)
    assert thread["board"] == "general"
    assert thread["created_on"] == thread["bumped_on"] == NOW
    assert thread["reported"] is False
    assert thread["replies"] == []
    assert "_id" not in thread


def test_build_reply_has_own_id():
    """Each reply gets its own 24-char id at construction."""
    a = build_reply("x", "pw", NOW)
    b = build_reply("y", "pw", NOW)
    assert len(a["_id"]) == 24
    assert a["_id"] != b["_id"]
    assert a["reported"] is False


def test_thread_projection_excludes_hidden_fields():
    """Thread reads exclude delete_password and reported."""
    assert THREAD_PROJECTION == {"delete_password": 0, "reported": 0}


def test_public_thread_strips_thread_and_reply_fields():
    """Hidden fields are removed from the thread and every reply."""
    view = public_thread(_thread_with_replies(2))
    assert "delete_password" not in view
    assert "reported" not in view
    for reply in view["replies"]:
        assert "delete_password" not in reply
        assert "reported" not in reply
        assert {"_id", "text", "created_on"} <= reply.keys()


def test_public_thread_does_not_mutate_source():
    """The public view is a copy; the stored thread keeps its secrets."""
    thread = _thread_with_replies(1)
    public_thread(thread)
    assert thread["replies"][0]["delete_password"] == "rpw"
    assert thread["delete_password"] == "pw"


def test_summarize_keeps_latest_three_in_order():
    """Summaries keep the last three replies in posting order plus the total count."""
    view = summarize_thread(_thread_with_replies(5), preview=3)
    assert [r["_id"] for r in view["replies"]] == ["r2", "r3", "r4"]
    assert view["replycount"] == 5


def test_summarize_with_fewer_replies_than_preview():
    """A thread with fewer replies than the preview shows them all."""
    view = summarize_thread(_thread_with_replies(1), preview=3)
    assert len(view["replies"]) == 1
    assert view["replycount"] == 1


def test_summarize_with_zero_preview():
    """preview=0 shows no replies but still counts them."""
    view = summarize_thread(_thread_with_replies(4), preview=0)
    assert view["replies"] == []
    assert view["replycount"] == 4


def test_find_reply_by_id():
    """Reply lookup by id returns the reply or None."""
    thread = _thread_with_replies(3)
    assert find_reply(thread, "r1")["text"] == "reply 1"
    assert find_reply(thread, "nope") is None


def test_password_matches():
    """Passwords compare exactly and never match a missing value."""
    assert password_matches("pw", "pw")
    assert not password_matches("pw", "PW")
    assert not password_matches(None, "pw")
    assert not password_matches("pw", None)
