"""
WebSocket consumer for the social realtime relay.

Key behavior:
- URL: /ws/social/
- Every frame, both directions, is `{"event": "<tag>", "data": {...}}`.
- A connection is addressed by its Channels channel name; `register user`
  binds a username to it for private messages.
- All connections join one broadcast group (see `relay.ChannelLayerDelivery`).
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from channels.generic.websocket import AsyncWebsocketConsumer
from pydantic import ValidationError

from social_server.config import config

from .events import ErrorCode, Event
from .relay import RelayService, relay_service
from .serializers import Frame, error_frame

logger = logging.getLogger(__name__)


class SocialConsumer(AsyncWebsocketConsumer):
    """One instance per WebSocket; all routing decisions live in `RelayService`."""

    relay: RelayService = relay_service

    async def connect(self) -> None:
        await self.accept()
        await self.relay.connect(self.channel_name)
        logger.info("Socket connected: %s", self.channel_name)

        await self.send_json({"event": Event.CONNECTED.value, "data": {"connectionId": self.channel_name}})

    async def disconnect(self, close_code: int) -> None:
        await self.relay.disconnect(self.channel_name)
        logger.info("Socket disconnected: %s (code=%s)", self.channel_name, close_code)

    async def receive(self, text_data: Optional[str] = None, bytes_data: Optional[bytes] = None) -> None:
        if not text_data:
            return

        if len(text_data.encode("utf-8")) > config.MAX_FRAME_BYTES:
            await self.send_json(error_frame(ErrorCode.FRAME_TOO_LARGE))
            return

        try:
            msg = json.loads(text_data)
        except json.JSONDecodeError:
            await self.send_json(error_frame(ErrorCode.INVALID_JSON))
            return

        try:
            frame = Frame.model_validate(msg)
        except ValidationError:
            await self.send_json(error_frame(ErrorCode.INVALID_FRAME, detail='expected {"event": str, "data": ...}'))
            return

        await self.relay.dispatch(self.channel_name, frame.event, frame.data)

    async def relay_frame(self, event: Dict[str, Any]) -> None:
        """
        Handler for frames routed through the channel layer (unicast or group).
        """
        if event.get("exclude") and event["exclude"] == self.channel_name:
            return
        await self.send_json(event["frame"])

    async def send_json(self, payload: Dict[str, Any]) -> None:
        await self.send(text_data=json.dumps(payload, separators=(",", ":"), ensure_ascii=False))
