"""
Realtime WebSocket app.

This app contains:
- A Channels consumer for `/ws/social/`
- In-memory presence tracking (username -> connection)
- The relay that persists and fans out social events
"""
