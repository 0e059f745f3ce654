"""Reply Routes - create, view, report, and delete replies inside a thread.

Invariants:
    - POST answers 303 See Other pointing at the thread page and bumps the thread
    - Bodies accepted as JSON or as an HTML form post
    - GET returns the full thread with every reply, hidden fields stripped
    - PUT / DELETE answer plain text (ActionOutcome values) with status 200
"""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from messageboard.api.dependencies import form_or_json, get_board_service
from messageboard.schemas.board import ReplyCreate, ReplyDelete, ReplyReport
from messageboard.services.board_service import BoardService

router = APIRouter(prefix="/api/replies", tags=["replies"])


@router.post("/{board}", status_code=status.HTTP_303_SEE_OTHER)
async def create_reply(
    board: str, body: ReplyCreate = Depends(form_or_json(ReplyCreate)),
    service: BoardService = Depends(get_board_service),
):
    """Add a reply, then send the client to the thread page."""
    await service.create_reply(
        board, body.thread_id, body.text, body.delete_password,
    )
    return RedirectResponse(
        f"/b/{board}/{body.thread_id}", status_code=status.HTTP_303_SEE_OTHER,
    )


@router.get("/{board}")
async def get_thread(
    board: str,
    thread_id: str = Query(..., min_length=1),
    service: BoardService = Depends(get_board_service),
):
    return await service.get_thread(board, thread_id)


@router.put("/{board}", response_class=PlainTextResponse)
async def report_reply(
    board: str, body: ReplyReport = Depends(form_or_json(ReplyReport)),
    service: BoardService = Depends(get_board_service),
):
    outcome = await service.report_reply(board, body.thread_id, body.reply_id)
    return outcome.value


@router.delete("/{board}", response_class=PlainTextResponse)
async def delete_reply(
    board: str, body: ReplyDelete = Depends(form_or_json(ReplyDelete)),
    service: BoardService = Depends(get_board_service),
):
    outcome = await service.delete_reply(
        board, body.thread_id, body.reply_id, body.delete_password,
    )
    return outcome.value
