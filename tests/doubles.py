"""Test doubles for the relay: a recording delivery and an in-memory gateway."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from realtime.events import ErrorCode
from realtime.gateway import PersistenceError, PersistenceGateway
from realtime.relay import Delivery


class RecordingDelivery(Delivery):
    """Captures frames instead of pushing them through a channel layer."""

    def __init__(self) -> None:
        self.members: List[str] = []
        self.sent: List[Tuple[str, Dict[str, Any]]] = []
        self.broadcasts: List[Tuple[Dict[str, Any], Optional[str]]] = []

    async def join(self, handle: str) -> None:
        self.members.append(handle)

    async def leave(self, handle: str) -> None:
        if handle in self.members:
            self.members.remove(handle)

    async def send(self, handle: str, frame: Dict[str, Any]) -> None:
        self.sent.append((handle, frame))

    async def broadcast(self, frame: Dict[str, Any], *, exclude: Optional[str] = None) -> None:
        self.broadcasts.append((frame, exclude))

    def received_by(self, handle: str) -> List[Dict[str, Any]]:
        """Frames `handle` would see, from unicasts and broadcasts alike."""
        frames = [f for h, f in self.sent if h == handle]
        if handle in self.members:
            frames += [f for f, exclude in self.broadcasts if exclude != handle]
        return frames


class MemoryGateway(PersistenceGateway):
    """Storage double; rows are plain dicts shaped like the wire payloads."""

    def __init__(self) -> None:
        self.private: List[dict] = []
        self.group_messages: List[dict] = []
        self.blogs: Dict[int, dict] = {}
        self.likes: set = set()
        self.comments: List[dict] = []
        self.groups: Dict[int, dict] = {}

    async def save_private_message(self, sender, receiver, message):
        row = {"id": len(self.private) + 1, "sender": sender, "receiver": receiver, "message": message}
        self.private.append(row)
        return row

    async def save_group_message(self, group_id, username, message):
        if group_id not in self.groups:
            raise PersistenceError(ErrorCode.NOT_FOUND, "Group matching query does not exist.")
        row = {"groupId": group_id, "username": username, "message": message}
        self.group_messages.append(row)
        return row

    async def create_blog(self, username, content, image):
        blog_id = len(self.blogs) + 1
        self.blogs[blog_id] = {"id": blog_id, "username": username, "content": content, "image": image, "likes": 0}
        return dict(self.blogs[blog_id])

    async def toggle_blog_like(self, blog_id, username):
        if blog_id not in self.blogs:
            raise PersistenceError(ErrorCode.NOT_FOUND, "Blog matching query does not exist.")
        key = (blog_id, username)
        if key in self.likes:
            self.likes.discard(key)
        else:
            self.likes.add(key)
        self.blogs[blog_id]["likes"] = sum(1 for b, _ in self.likes if b == blog_id)
        return dict(self.blogs[blog_id])

    async def add_blog_comment(self, blog_id, username, comment):
        if blog_id not in self.blogs:
            raise PersistenceError(ErrorCode.NOT_FOUND, "Blog matching query does not exist.")
        row = {"blogId": blog_id, "username": username, "comment": comment}
        self.comments.append(row)
        return row

    async def create_group(self, group_name, created_by):
        group_id = len(self.groups) + 1
        self.groups[group_id] = {"id": group_id, "groupName": group_name, "createdBy": created_by}
        return dict(self.groups[group_id])


class BrokenGateway(MemoryGateway):
    async def save_private_message(self, sender, receiver, message):
        raise PersistenceError(ErrorCode.STORAGE_ERROR, "database is locked")

    async def create_blog(self, username, content, image):
        raise PersistenceError(ErrorCode.STORAGE_ERROR, "database is locked")

