from enum import Enum


class Event(str, Enum):
    """Event tags carried in the `event` field of every frame."""

    # Client -> server
    REGISTER_USER = "register user"
    PRIVATE_MESSAGE = "private message"
    GROUP_MESSAGE = "group message"
    CHAT_MESSAGE = "chat message"
    CREATE_BLOG = "create blog"
    BLOG_LIKE = "blog like"
    BLOG_COMMENT = "blog comment"
    CREATE_GROUP = "create group"
    WHITEBOARD_DRAW = "whiteboard draw"
    SCREEN_SHARE = "screen share"
    MIC_TOGGLE = "mic toggle"

    # Server -> client only
    CONNECTED = "connected"
    NEW_BLOG = "new blog"
    BLOG_UPDATED = "blog updated"
    NEW_GROUP = "new group"
    ERROR = "error"


class ErrorCode(str, Enum):
    INVALID_JSON = "invalid_json"
    INVALID_FRAME = "invalid_frame"
    FRAME_TOO_LARGE = "frame_too_large"
    UNKNOWN_EVENT = "unknown_event"
    INVALID_PAYLOAD = "invalid_payload"
    NOT_FOUND = "not_found"
    STORAGE_ERROR = "storage_error"
