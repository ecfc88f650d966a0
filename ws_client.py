"""
CLI client for the social server's realtime relay and history API.

Supports:
- Emit one event over WebSocket:   /ws/social/
- Listen to relayed events:         /ws/social/ (optionally registering a username)
- Read history over HTTP:           GET /api/<kind>/

WebSocket protocol (`SocialConsumer`):
- Every frame is {"event": "<tag>", "data": {...}} in both directions.
- Server sends {"event":"connected","data":{"connectionId":...}} first.
- Client tags: "register user", "private message", "group message",
  "chat message", "create blog", "blog like", "blog comment", "create group",
  "whiteboard draw", "screen share", "mic toggle".
- Failures come back to the sender only as {"event":"error","data":{...}}.

Examples:
  python ws_client.py listen --username bob
  python ws_client.py emit --event "private message" \
      --data-json '{"from":"alice","to":"bob","message":"hi"}' --username alice
  python ws_client.py history privatechats --param user1=alice --param user2=bob
"""

from __future__ import annotations

import argparse
import asyncio
import inspect
import json
import sys
from typing import Any, Dict, List, Optional

HISTORY_KINDS = ("users", "users/search", "blogs", "groups", "blogcomments", "privatechats", "groupchats", "online")


def _rstrip_slash(s: str) -> str:
    return s[:-1] if s.endswith("/") else s


def _ws_social_url(ws_base: str) -> str:
    return f"{_rstrip_slash(ws_base)}/ws/social/"


def _http_url(http_base: str, path: str) -> str:
    return f"{_rstrip_slash(http_base)}{path}"


def _json_arg(s: Optional[str], *, name: str) -> Any:
    if s is None:
        return None
    try:
        return json.loads(s)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON for {name}: {e}") from e


def _params(pairs: List[str]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected key=value, got {pair!r}")
        out[key] = value
    return out


def _frame(event: str, data: Any) -> str:
    return json.dumps({"event": event, "data": data}, separators=(",", ":"), ensure_ascii=False)


def _print_frame(msg: Dict[str, Any]) -> None:
    event = msg.get("event")
    stream = sys.stderr if event == "error" else sys.stdout
    stream.write(f"[{event}] {json.dumps(msg.get('data'), ensure_ascii=False)}\n")
    stream.flush()


async def _connect(ws_url: str, origin: Optional[str]):
    try:
        import websockets  # type: ignore
    except ImportError:
        print("Missing dependency: websockets. Install with: pip install 'social-server[client]'", file=sys.stderr)
        raise

    kwargs: Dict[str, Any] = {}
    if origin:
        headers = [("Origin", origin)]
        sig = inspect.signature(websockets.connect)
        if "additional_headers" in sig.parameters:
            kwargs["additional_headers"] = headers
        elif "extra_headers" in sig.parameters:
            kwargs["extra_headers"] = headers
    return await websockets.connect(ws_url, **kwargs)


async def ws_session(
    *,
    ws_base: str,
    origin: Optional[str],
    username: Optional[str],
    event: Optional[str],
    data: Any,
    linger: float,
    listen: bool,
) -> int:
    async with (await _connect(_ws_social_url(ws_base), origin)) as ws:
        hello = json.loads(await asyncio.wait_for(ws.recv(), timeout=5))
        sys.stderr.write(f"[connected {hello.get('data', {}).get('connectionId')}]\n")

        if username:
            await ws.send(_frame("register user", {"username": username}))
        if event:
            await ws.send(_frame(event, data if data is not None else {}))

        exit_code = 0
        while True:
            try:
                raw = await (ws.recv() if listen else asyncio.wait_for(ws.recv(), timeout=linger))
            except asyncio.TimeoutError:
                return exit_code
            msg = json.loads(raw)
            _print_frame(msg)
            if msg.get("event") == "error":
                exit_code = 1


async def http_history(*, http_base: str, kind: str, params: Dict[str, str]) -> int:
    try:
        import aiohttp  # type: ignore
    except ImportError:
        print("Missing dependency: aiohttp. Install with: pip install 'social-server[client]'", file=sys.stderr)
        return 2

    url = _http_url(http_base, f"/api/{kind}/")
    async with aiohttp.ClientSession() as session:
        async with session.get(url, params=params) as resp:
            text = await resp.text()
            try:
                body = json.loads(text) if text else {}
            except json.JSONDecodeError:
                print(f"Non-JSON response from {url}: {resp.status} {text}", file=sys.stderr)
                return 1
            print(json.dumps(body, indent=2, ensure_ascii=False))
            return 0 if resp.status < 400 else 1


async def main() -> int:
    parser = argparse.ArgumentParser(description="CLI client for the social realtime relay")
    parser.add_argument("--http", default="http://localhost:8000", help="HTTP base, e.g. http://localhost:8000")
    parser.add_argument("--ws", default="ws://localhost:8000", help="WS base, e.g. ws://localhost:8000")
    parser.add_argument("--origin", help="Optional Origin header for WebSocket handshake")

    sub = parser.add_subparsers(dest="cmd", required=True)

    p_emit = sub.add_parser("emit", help="Send one event and print what comes back")
    p_emit.add_argument("--event", required=True, help='Event tag, e.g. "chat message"')
    p_emit.add_argument("--data-json", help="JSON payload for the event")
    p_emit.add_argument("--username", help="Register this username before emitting")
    p_emit.add_argument("--linger", type=float, default=1.0, help="Seconds to wait for replies")

    p_listen = sub.add_parser("listen", help="Print relayed events until interrupted")
    p_listen.add_argument("--username", help="Register this username to receive private messages")

    p_hist = sub.add_parser("history", help="Read stored history (HTTP)")
    p_hist.add_argument("kind", choices=HISTORY_KINDS)
    p_hist.add_argument("--param", action="append", default=[], help="Query parameter key=value (repeatable)")

    args = parser.parse_args()

    if args.cmd == "emit":
        return await ws_session(
            ws_base=args.ws,
            origin=args.origin,
            username=args.username,
            event=args.event,
            data=_json_arg(args.data_json, name="--data-json"),
            linger=args.linger,
            listen=False,
        )
    if args.cmd == "listen":
        return await ws_session(
            ws_base=args.ws,
            origin=args.origin,
            username=args.username,
            event=None,
            data=None,
            linger=0,
            listen=True,
        )
    if args.cmd == "history":
        return await http_history(http_base=args.http, kind=args.kind, params=_params(args.param))

    return 2


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
