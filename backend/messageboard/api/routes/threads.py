"""Thread Routes - create, list, report, and delete threads on a board.

Invariants:
    - POST answers 303 See Other pointing at the board page
    - Bodies accepted as JSON or as an HTML form post
    - PUT / DELETE answer plain text (ActionOutcome values) with status 200
    - Unknown thread ids surface as 404 via ResourceNotFoundError
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from messageboard.api.dependencies import form_or_json, get_board_service
from messageboard.schemas.board import ThreadCreate, ThreadDelete, ThreadReport
from messageboard.services.board_service import BoardService

router = APIRouter(prefix="/api/threads", tags=["threads"])


@router.post("/{board}", status_code=status.HTTP_303_SEE_OTHER)
async def create_thread(
    board: str, body: ThreadCreate = Depends(form_or_json(ThreadCreate)),
    service: BoardService = Depends(get_board_service),
):
    """Create a thread, then send the client to the board page."""
    await service.create_thread(board, body.text, body.delete_password)
    return RedirectResponse(
        f"/b/{board}/", status_code=status.HTTP_303_SEE_OTHER,
    )


@router.get("/{board}")
async def list_threads(
    board: str, service: BoardService = Depends(get_board_service),
):
    """10 most recently bumped threads with their 3 latest replies."""
    return await service.list_threads(board)


@router.put("/{board}", response_class=PlainTextResponse)
async def report_thread(
    board: str, body: ThreadReport = Depends(form_or_json(ThreadReport)),
    service: BoardService = Depends(get_board_service),
):
    outcome = await service.report_thread(board, body.thread_id)
    return outcome.value


@router.delete("/{board}", response_class=PlainTextResponse)
async def delete_thread(
    board: str, body: ThreadDelete = Depends(form_or_json(ThreadDelete)),
    service: BoardService = Depends(get_board_service),
):
    outcome = await service.delete_thread(
        board, body.thread_id, body.delete_password,
    )
    return outcome.value
