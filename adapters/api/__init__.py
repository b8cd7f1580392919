"""
HTTP API adapter (aiohttp) for the mobile app.

Routes: discovery (leagues, teams, free agents), location setup and chat,
including a WebSocket that pushes new messages of one conversation.
"""
