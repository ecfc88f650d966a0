"""
Relay of realtime events between connections.

Every incoming event is handled by one method below, which picks a delivery
policy:
- unicast: one connection (private message recipient, sender echo)
- broadcast: every connection, sender included
- broadcast minus sender: whiteboard strokes

Events that are persisted are written first; only a successful write is
relayed. A failed write or an invalid payload is reported to the sender alone
with an `error` frame.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from channels.layers import get_channel_layer
from pydantic import ValidationError

from social_server.config import config

from .events import ErrorCode, Event
from .gateway import DjangoPersistenceGateway, PersistenceError, PersistenceGateway
from .registry import ConnectionRegistry
from .serializers import (
    BlogComment,
    BlogLike,
    ChatMessage,
    CreateBlog,
    CreateGroup,
    GroupMessage,
    PrivateMessage,
    RegisterUser,
    RelayedData,
    error_frame,
)

logger = logging.getLogger(__name__)

# Channels message type; dispatched to `SocialConsumer.relay_frame`.
RELAY_MESSAGE_TYPE = "relay.frame"


def make_frame(event: Event | str, data: Any) -> Dict[str, Any]:
    return {"event": event.value if isinstance(event, Event) else event, "data": data}


class Delivery:
    """How frames reach connections. `handle` is a Channels channel name."""

    async def join(self, handle: str) -> None:
        raise NotImplementedError

    async def leave(self, handle: str) -> None:
        raise NotImplementedError

    async def send(self, handle: str, frame: Dict[str, Any]) -> None:
        raise NotImplementedError

    async def broadcast(self, frame: Dict[str, Any], *, exclude: Optional[str] = None) -> None:
        raise NotImplementedError


class ChannelLayerDelivery(Delivery):
    """
    Fan-out through one Channels group that every connection joins.

    The channel layer is looked up per call so tests (and settings overrides)
    always see the current default layer.
    """

    def __init__(self, group_name: Optional[str] = None):
        self.group_name = group_name or config.BROADCAST_GROUP

    async def join(self, handle: str) -> None:
        await get_channel_layer().group_add(self.group_name, handle)

    async def leave(self, handle: str) -> None:
        await get_channel_layer().group_discard(self.group_name, handle)

    async def send(self, handle: str, frame: Dict[str, Any]) -> None:
        await get_channel_layer().send(handle, {"type": RELAY_MESSAGE_TYPE, "frame": frame})

    async def broadcast(self, frame: Dict[str, Any], *, exclude: Optional[str] = None) -> None:
        await get_channel_layer().group_send(
            self.group_name,
            {"type": RELAY_MESSAGE_TYPE, "frame": frame, "exclude": exclude},
        )


Handler = Callable[[str, Any], Awaitable[None]]


class RelayService:
    """
    Owns the connection registry and routes events to handlers.

    One instance serves every consumer in the process (see `relay_service`).
    """

    def __init__(
        self,
        *,
        registry: Optional[ConnectionRegistry] = None,
        gateway: Optional[PersistenceGateway] = None,
        delivery: Optional[Delivery] = None,
    ):
        self.registry = registry if registry is not None else ConnectionRegistry()
        self.gateway = gateway if gateway is not None else DjangoPersistenceGateway()
        self.delivery = delivery if delivery is not None else ChannelLayerDelivery()
        self._handlers: Dict[str, Handler] = {
            Event.REGISTER_USER.value: self.on_register_user,
            Event.PRIVATE_MESSAGE.value: self.on_private_message,
            Event.GROUP_MESSAGE.value: self.on_group_message,
            Event.CHAT_MESSAGE.value: self.on_chat_message,
            Event.CREATE_BLOG.value: self.on_create_blog,
            Event.BLOG_LIKE.value: self.on_blog_like,
            Event.BLOG_COMMENT.value: self.on_blog_comment,
            Event.CREATE_GROUP.value: self.on_create_group,
            Event.WHITEBOARD_DRAW.value: self.on_whiteboard_draw,
            Event.SCREEN_SHARE.value: self._passthrough(Event.SCREEN_SHARE),
            Event.MIC_TOGGLE.value: self._passthrough(Event.MIC_TOGGLE),
        }

    # Connection lifecycle

    async def connect(self, handle: str) -> None:
        await self.delivery.join(handle)

    async def disconnect(self, handle: str) -> None:
        removed = self.registry.remove(handle)
        await self.delivery.leave(handle)
        if removed:
            logger.info("Presence removed for %s (%s)", ", ".join(removed), handle)

    # Dispatch

    async def dispatch(self, handle: str, event: str, data: Any) -> None:
        handler = self._handlers.get(event)
        if handler is None:
            await self.delivery.send(handle, error_frame(ErrorCode.UNKNOWN_EVENT, event=event))
            return

        try:
            await handler(handle, data)
        except ValidationError as exc:
            logger.info("Invalid %r payload from %s: %s", event, handle, exc.errors(include_url=False))
            await self.delivery.send(
                handle,
                error_frame(ErrorCode.INVALID_PAYLOAD, event=event, detail=_first_error(exc)),
            )
        except PersistenceError as exc:
            if exc.code == ErrorCode.STORAGE_ERROR:
                logger.exception("Storage failure handling %r from %s", event, handle)
            else:
                logger.warning("Dropped %r from %s: %s", event, handle, exc)
            await self.delivery.send(handle, error_frame(exc.code, event=event, detail=str(exc)))

    # Handlers

    async def on_register_user(self, handle: str, data: Any) -> None:
        payload = RegisterUser.model_validate(data)
        self.registry.register(payload.username, handle)

    async def on_private_message(self, handle: str, data: Any) -> None:
        payload = PrivateMessage.model_validate(data)
        await self.gateway.save_private_message(payload.sender, payload.to, payload.message)

        frame = make_frame(Event.PRIVATE_MESSAGE, data)
        target = self.registry.lookup(payload.to)
        if target is not None:
            await self.delivery.send(target, frame)
        else:
            logger.debug("Private message for offline user %s stored only", payload.to)
        await self.delivery.send(handle, frame)

    async def on_group_message(self, handle: str, data: Any) -> None:
        payload = GroupMessage.model_validate(data)
        await self.gateway.save_group_message(payload.group_id, payload.username, payload.message)
        await self.delivery.broadcast(make_frame(Event.GROUP_MESSAGE, data))

    async def on_chat_message(self, handle: str, data: Any) -> None:
        ChatMessage.model_validate(data)
        await self.delivery.broadcast(make_frame(Event.CHAT_MESSAGE, data))

    async def on_create_blog(self, handle: str, data: Any) -> None:
        payload = CreateBlog.model_validate(data)
        blog = await self.gateway.create_blog(payload.username, payload.content, payload.image)
        await self.delivery.broadcast(make_frame(Event.NEW_BLOG, blog))

    async def on_blog_like(self, handle: str, data: Any) -> None:
        payload = BlogLike.model_validate(data)
        blog = await self.gateway.toggle_blog_like(payload.blog_id, payload.username)
        await self.delivery.broadcast(make_frame(Event.BLOG_UPDATED, blog))

    async def on_blog_comment(self, handle: str, data: Any) -> None:
        payload = BlogComment.model_validate(data)
        await self.gateway.add_blog_comment(payload.blog_id, payload.username, payload.comment)
        await self.delivery.broadcast(make_frame(Event.BLOG_COMMENT, data))

    async def on_create_group(self, handle: str, data: Any) -> None:
        payload = CreateGroup.model_validate(data)
        group = await self.gateway.create_group(payload.group_name, payload.created_by)
        await self.delivery.broadcast(make_frame(Event.NEW_GROUP, group))

    async def on_whiteboard_draw(self, handle: str, data: Any) -> None:
        RelayedData.validate_python(data)
        await self.delivery.broadcast(make_frame(Event.WHITEBOARD_DRAW, data), exclude=handle)

    def _passthrough(self, event: Event) -> Handler:
        # Signaling only (screen share, mic toggle): relayed to everyone as received.
        async def handler(handle: str, data: Any) -> None:
            RelayedData.validate_python(data)
            await self.delivery.broadcast(make_frame(event, data))

        return handler


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors(include_url=False)
    if not errors:
        return str(exc)
    err = errors[0]
    loc = ".".join(str(p) for p in err.get("loc", ())) or "data"
    return f"{loc}: {err.get('msg')}"


relay_service = RelayService()
