"""
Persistence gateway used by the relay.

Each call runs the matching `social.services` function in the database thread
and returns the wire payload of the stored row. Any storage failure surfaces as
`PersistenceError`, so the relay has one exception to handle.
"""

from __future__ import annotations

from typing import Optional

from channels.db import database_sync_to_async
from django.core.exceptions import ObjectDoesNotExist
from django.db import DatabaseError, DataError

from social import services
from social.schemas import BlogCommentOut, BlogOut, GroupChatOut, GroupOut, PrivateChatOut

from .events import ErrorCode


class PersistenceError(Exception):
    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.code = code


def _run(serializer, service, *args) -> dict:
    """Call an ORM service and serialize its result, both in the database thread."""
    try:
        obj = service(*args)
    except ObjectDoesNotExist as exc:
        raise PersistenceError(ErrorCode.NOT_FOUND, str(exc) or "record not found") from exc
    except DataError as exc:
        # value rejected by the column, e.g. a username longer than 150 chars
        raise PersistenceError(ErrorCode.INVALID_PAYLOAD, str(exc)) from exc
    except UnicodeError as exc:
        raise PersistenceError(ErrorCode.INVALID_PAYLOAD, "text is not valid UTF-8") from exc
    except DatabaseError as exc:
        raise PersistenceError(ErrorCode.STORAGE_ERROR, str(exc)) from exc
    return serializer.dump(obj)


class PersistenceGateway:
    """Async storage interface the relay depends on."""

    async def save_private_message(self, sender: str, receiver: str, message: str) -> dict:
        raise NotImplementedError

    async def save_group_message(self, group_id: int, username: str, message: str) -> dict:
        raise NotImplementedError

    async def create_blog(self, username: str, content: str, image: Optional[str]) -> dict:
        raise NotImplementedError

    async def toggle_blog_like(self, blog_id: int, username: str) -> dict:
        raise NotImplementedError

    async def add_blog_comment(self, blog_id: int, username: str, comment: str) -> dict:
        raise NotImplementedError

    async def create_group(self, group_name: str, created_by: str) -> dict:
        raise NotImplementedError


class DjangoPersistenceGateway(PersistenceGateway):
    async def save_private_message(self, sender: str, receiver: str, message: str) -> dict:
        return await database_sync_to_async(_run)(
            PrivateChatOut, services.save_private_message, sender, receiver, message
        )

    async def save_group_message(self, group_id: int, username: str, message: str) -> dict:
        return await database_sync_to_async(_run)(
            GroupChatOut, services.save_group_message, group_id, username, message
        )

    async def create_blog(self, username: str, content: str, image: Optional[str]) -> dict:
        return await database_sync_to_async(_run)(BlogOut, services.create_blog, username, content, image)

    async def toggle_blog_like(self, blog_id: int, username: str) -> dict:
        return await database_sync_to_async(_run)(BlogOut, services.toggle_blog_like, blog_id, username)

    async def add_blog_comment(self, blog_id: int, username: str, comment: str) -> dict:
        return await database_sync_to_async(_run)(
            BlogCommentOut, services.add_blog_comment, blog_id, username, comment
        )

    async def create_group(self, group_name: str, created_by: str) -> dict:
        return await database_sync_to_async(_run)(GroupOut, services.create_group, group_name, created_by)
