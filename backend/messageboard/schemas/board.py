"""Board Schemas - Pydantic models for thread and reply request bodies.

Invariants:
    - text: 1-10000 chars after stripping whitespace
    - delete_password: 1-200 chars, never stripped (compared verbatim)
    - thread_id / reply_id: non-empty strings; shape is not checked, an unknown id is a 404
"""

from pydantic import BaseModel, Field, field_validator


class ThreadCreate(BaseModel):
    """New thread on a board."""
    text: str = Field(min_length=1, max_length=10_000)
    delete_password: str = Field(min_length=1, max_length=200)

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("text cannot be empty or whitespace")
        return v


class ThreadReport(BaseModel):
    thread_id: str = Field(min_length=1)


class ThreadDelete(BaseModel):
    thread_id: str = Field(min_length=1)
    delete_password: str = Field(min_length=1, max_length=200)


class ReplyCreate(ThreadCreate):
    """New reply inside a thread."""
    thread_id: str = Field(min_length=1)


class ReplyReport(BaseModel):
    thread_id: str = Field(min_length=1)
    reply_id: str = Field(min_length=1)


class ReplyDelete(ReplyReport):
    delete_password: str = Field(min_length=1, max_length=200)
