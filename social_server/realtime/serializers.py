"""
Pydantic models for incoming realtime payloads and outgoing frames.

Incoming payloads keep their extra keys: several events relay the raw payload,
so validation only guarantees the fields persistence needs.
"""

from __future__ import annotations

from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from .events import ErrorCode, Event


def ensure_utf8(value: Any) -> Any:
    """Reject strings, at any depth, that cannot be written out as UTF-8 (lone surrogates)."""
    if isinstance(value, str):
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError("string is not valid UTF-8") from None
    elif isinstance(value, dict):
        for key, item in value.items():
            ensure_utf8(key)
            ensure_utf8(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            ensure_utf8(item)
    return value


# Opaque payloads relayed as received (whiteboard, screen share, mic toggle).
RelayedData = TypeAdapter(Annotated[Any, AfterValidator(ensure_utf8)])


class EventPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @model_validator(mode="before")
    @classmethod
    def _utf8_only(cls, data: Any) -> Any:
        # extra keys are relayed too, so the whole payload is checked
        return ensure_utf8(data)


class RegisterUser(EventPayload):
    username: str = Field(min_length=1)


class PrivateMessage(EventPayload):
    sender: str = Field(alias="from", min_length=1)
    to: str = Field(min_length=1)
    message: str


class GroupMessage(EventPayload):
    group_id: int = Field(alias="groupId")
    username: str = Field(min_length=1)
    message: str


class ChatMessage(EventPayload):
    sender: str = Field(alias="from", min_length=1)
    message: str


class CreateBlog(EventPayload):
    username: str = Field(min_length=1)
    content: str
    image: Optional[str] = None


class BlogLike(EventPayload):
    blog_id: int = Field(alias="blogId")
    username: str = Field(min_length=1)


class BlogComment(EventPayload):
    blog_id: int = Field(alias="blogId")
    username: str = Field(min_length=1)
    comment: str


class CreateGroup(EventPayload):
    group_name: str = Field(alias="groupName", min_length=1)
    created_by: str = Field(alias="createdBy", min_length=1)


class Frame(BaseModel):
    """One realtime frame: `{"event": "<tag>", "data": {...}}`."""

    event: Annotated[str, AfterValidator(ensure_utf8)] = Field(min_length=1)
    data: Any = None


class ErrorData(BaseModel):
    event: Optional[str] = None
    error: ErrorCode
    detail: Optional[str] = None


def error_frame(code: ErrorCode, *, event: Optional[str] = None, detail: Optional[str] = None) -> dict:
    data = ErrorData(event=event, error=code, detail=detail)
    return {"event": Event.ERROR.value, "data": data.model_dump(mode="json")}
