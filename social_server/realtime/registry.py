"""
Presence tracking: which connection currently speaks for a username.

WHY:
- Channels groups do not provide a way to list members or address one user.
- Private messages are routed to a single connection by username.

Design:
- One dict per registry: username -> channel_name (the connection handle).
- Registration overwrites silently (last writer wins, e.g. a second browser tab).
- Removal is by handle and only removes entries still pointing at that handle,
  so a superseded connection closing never drops the newer mapping.
- The map is guarded by a lock; no operation awaits while holding it.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class ConnectionRegistry:
    def __init__(self) -> None:
        self._handles: Dict[str, str] = {}  # username -> channel_name
        self._lock = threading.Lock()

    def register(self, username: str, handle: str) -> None:
        with self._lock:
            previous = self._handles.get(username)
            self._handles[username] = handle
        if previous is not None and previous != handle:
            logger.info("Presence for %s moved from %s to %s", username, previous, handle)

    def lookup(self, username: str) -> Optional[str]:
        with self._lock:
            return self._handles.get(username)

    def remove(self, handle: str) -> List[str]:
        """Drop every username currently mapped to `handle`; returns the usernames removed."""
        with self._lock:
            removed = [name for name, h in self._handles.items() if h == handle]
            for name in removed:
                del self._handles[name]
        return removed

    def online(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._handles)

    def clear(self) -> None:
        with self._lock:
            self._handles.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._handles)

    def __contains__(self, username: object) -> bool:
        with self._lock:
            return username in self._handles
