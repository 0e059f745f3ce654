"""FastAPI dependencies wiring the store and settings into BoardService.

Invariants:
    - Request bodies may be JSON or an HTML form post; both validate into the
      same pydantic model
    - Any body that fails to parse or validate surfaces as RequestValidationError
      (400 via the validation handler)
"""

from typing import Awaitable, Callable, TypeVar

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from messageboard.config import Settings, get_settings
from messageboard.core.repository_protocols import StoreLike
from messageboard.infrastructure.document_store import get_store
from messageboard.services.board_service import BoardService

ModelT = TypeVar("ModelT", bound=BaseModel)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_board_service(
    store: StoreLike = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> BoardService:
    return BoardService(
        store.collection(settings.threads_collection),
        page_size=settings.threads_page_size,
        preview_size=settings.reply_preview_size,
    )


def form_or_json(model: type[ModelT]) -> Callable[[Request], Awaitable[ModelT]]:
    """Build a dependency that reads `model` from a form or JSON request body."""

    async def parse_body(request: Request) -> ModelT:
        content_type = request.headers.get("content-type", "")
        if content_type.startswith(FORM_CONTENT_TYPES):
            form = await request.form()
            data = {key: form[key] for key in form.keys()}
        else:
            try:
                data = await request.json()
            except ValueError as exc:
                raise RequestValidationError([{
                    "type": "json_invalid",
                    "loc": ("body",),
                    "msg": "Request body is not valid JSON",
                    "input": None,
                }]) from exc
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise RequestValidationError([
                {**err, "loc": ("body", *err["loc"])}
                for err in exc.errors(include_url=False)
            ]) from exc

    return parse_body
