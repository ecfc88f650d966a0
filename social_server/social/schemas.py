"""
Wire representations of stored rows.

Field names are camelCase on the wire (`groupName`, `createdAt`, ...), which is
what the browser clients already read.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True, alias_generator=to_camel)

    @classmethod
    def dump(cls, obj: Any) -> dict:
        return cls.model_validate(obj).model_dump(mode="json", by_alias=True)

    @classmethod
    def dump_many(cls, objs) -> list[dict]:
        return [cls.dump(o) for o in objs]


class BlogOut(WireModel):
    id: int
    username: str
    content: str
    image: Optional[str] = None
    likes: int
    created_at: datetime
    updated_at: datetime


class BlogCommentOut(WireModel):
    id: int
    blog_id: int
    username: str
    comment: str
    created_at: datetime


class GroupOut(WireModel):
    id: int
    group_name: str
    created_by: str
    created_at: datetime
    updated_at: datetime


class PrivateChatOut(WireModel):
    id: int
    sender: str
    receiver: str
    message: str
    created_at: datetime


class GroupChatOut(WireModel):
    id: int
    group_id: int
    username: str
    message: str
    created_at: datetime


class UserOut(WireModel):
    id: int
    username: str
    is_staff: bool
    date_joined: datetime
