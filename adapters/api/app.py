"""
HTTP API for the mobile app (aiohttp application).

Identity: the `X-User-Id` header carries the authenticated user ID
(authentication itself is handled by the hosted backend).
"""

import logging
from typing import Optional

from aiohttp import web
from pydantic import ValidationError

from config.features import features
from core.domain.models import (
    User, Nearby, SkillLevel, LeagueStatus, ExperienceLevel, MessageType,
)
from core.domain.constants import MAX_MESSAGE_LENGTH, RADIUS_OPTIONS
from core.utils.location import format_distance
from adapters.api.loader import Container

logger = logging.getLogger(__name__)

USER_HEADER = "X-User-Id"


def _error(status: int, message: str) -> web.Response:
    return web.json_response({"error": True, "status_code": status, "message": message}, status=status)


def _enum_param(request: web.Request, name: str, enum_cls):
    """Parse an optional enum query param. 'all' and empty mean no filter."""
    raw = request.query.get(name, "").strip().lower()
    if not raw or raw == "all":
        return None
    try:
        return enum_cls(raw)
    except ValueError:
        raise web.HTTPBadRequest(text=f"Invalid {name}: {raw}")


def serialize_nearby(entry: Nearby) -> dict:
    data = entry.item.model_dump(mode="json")
    data["distance"] = entry.distance
    data["distance_label"] = format_distance(entry.distance)
    return data


async def _read_json(request: web.Request) -> dict:
    try:
        body = await request.json()
    except ValueError:
        raise web.HTTPBadRequest(text="Body must be JSON")
    if not isinstance(body, dict):
        raise web.HTTPBadRequest(text="Body must be a JSON object")
    return body


def create_api_app(container: Container) -> web.Application:
    """Create aiohttp app with discovery, location and chat routes."""

    @web.middleware
    async def error_middleware(request: web.Request, handler):
        try:
            return await handler(request)
        except web.HTTPException as e:
            if e.status < 400:
                raise
            return _error(e.status, e.text or e.reason)
        except ValidationError as e:
            return _error(400, str(e))
        except PermissionError as e:
            return _error(401, str(e))
        except ValueError as e:
            return _error(400, str(e))
        except Exception as e:
            logger.error(f"[API] {request.method} {request.path} failed: {e}", exc_info=True)
            return _error(500, "Internal server error")

    async def current_user(request: web.Request) -> User:
        user_id = request.headers.get(USER_HEADER, "").strip()
        if not user_id:
            raise web.HTTPUnauthorized(text=f"Missing {USER_HEADER} header")
        user = await container.user_repo.get_by_id(user_id)
        if user is None:
            raise web.HTTPNotFound(text=f"User {user_id} not found")
        return user

    # === SYSTEM ===

    async def handle_health(request: web.Request) -> web.Response:
        return web.json_response({"status": "ok", "features": features.to_dict()})

    async def handle_radius_options(request: web.Request) -> web.Response:
        return web.json_response(RADIUS_OPTIONS)

    # === DISCOVERY ===

    async def handle_leagues(request: web.Request) -> web.Response:
        user = await current_user(request)
        results = await container.discovery_service.find_leagues(
            user,
            query=request.query.get("q", ""),
            skill_level=_enum_param(request, "skill_level", SkillLevel),
            status=_enum_param(request, "status", LeagueStatus),
        )
        return web.json_response([serialize_nearby(r) for r in results])

    async def handle_teams(request: web.Request) -> web.Response:
        user = await current_user(request)
        results = await container.discovery_service.find_teams(
            user,
            query=request.query.get("q", ""),
            skill_level=_enum_param(request, "skill_level", SkillLevel),
        )
        return web.json_response([serialize_nearby(r) for r in results])

    async def handle_free_agents(request: web.Request) -> web.Response:
        user = await current_user(request)
        results = await container.discovery_service.find_free_agents(
            user,
            query=request.query.get("q", ""),
            experience_level=_enum_param(request, "experience_level", ExperienceLevel),
        )
        return web.json_response([serialize_nearby(r) for r in results])

    # === LOCATION ===

    async def handle_set_location(request: web.Request) -> web.Response:
        user = await current_user(request)
        body = await _read_json(request)
        result = await container.location_service.set_location(
            user.id,
            str(body.get("query") or ""),
            body.get("search_radius", features.DEFAULT_SEARCH_RADIUS),
        )
        if not result.ok:
            return _error(400, result.error)
        return web.json_response(result.user.model_dump(mode="json"))

    # === CHAT ===

    async def handle_conversations(request: web.Request) -> web.Response:
        user = await current_user(request)
        chat = container.chat_service(user.id)
        await chat.load_conversations()
        return web.json_response({
            "conversations": [c.model_dump(mode="json") for c in chat.conversations],
            "total_unread_count": chat.total_unread_count,
        })

    async def handle_messages(request: web.Request) -> web.Response:
        user = await current_user(request)
        chat = container.chat_service(user.id)
        await chat.load_messages(request.match_info["conversation_id"])
        return web.json_response([m.model_dump(mode="json") for m in chat.messages])

    async def handle_send_message(request: web.Request) -> web.Response:
        user = await current_user(request)
        body = await _read_json(request)

        content: Optional[str] = body.get("content")
        image_url: Optional[str] = body.get("image_url")
        for name, value in (("content", content), ("image_url", image_url)):
            if value is not None and not isinstance(value, str):
                return _error(400, f"{name} must be a string")
        try:
            message_type = MessageType(body.get("message_type", MessageType.TEXT.value))
        except ValueError:
            return _error(400, f"Invalid message_type: {body.get('message_type')}")
        if not content and not image_url:
            return _error(400, "Message needs content or image_url")
        if content and len(content) > MAX_MESSAGE_LENGTH:
            return _error(400, f"Message longer than {MAX_MESSAGE_LENGTH} characters")

        chat = container.chat_service(user.id)
        message = await chat.send_message(
            request.match_info["conversation_id"], content, message_type, image_url,
        )
        return web.json_response(message.model_dump(mode="json"), status=201)

    async def handle_mark_read(request: web.Request) -> web.Response:
        user = await current_user(request)
        chat = container.chat_service(user.id)
        await chat.mark_as_read(request.match_info["conversation_id"])
        return web.json_response({"ok": True})

    async def handle_direct(request: web.Request) -> web.Response:
        user = await current_user(request)
        body = await _read_json(request)
        other_user_id = body.get("user_id")
        if not other_user_id:
            return _error(400, "user_id is required")
        chat = container.chat_service(user.id)
        conversation_id = await chat.create_direct_conversation(str(other_user_id))
        return web.json_response({"conversation_id": conversation_id})

    async def handle_team(request: web.Request) -> web.Response:
        user = await current_user(request)
        body = await _read_json(request)
        team_id = body.get("team_id")
        if not team_id:
            return _error(400, "team_id is required")
        team = await container.team_repo.get_by_id(str(team_id))
        if team is None:
            return _error(404, f"Team {team_id} not found")
        chat = container.chat_service(user.id)
        conversation_id = await chat.create_team_conversation(team.id, team.name)
        return web.json_response({"conversation_id": conversation_id})

    async def handle_join(request: web.Request) -> web.Response:
        user = await current_user(request)
        chat = container.chat_service(user.id)
        await chat.join_league_conversation(request.match_info["conversation_id"])
        return web.json_response({"ok": True})

    async def handle_live(request: web.Request) -> web.StreamResponse:
        """WebSocket: push each new message of the conversation as JSON."""
        user = await current_user(request)
        conversation_id = request.match_info["conversation_id"]

        ws = web.WebSocketResponse(heartbeat=30)
        await ws.prepare(request)

        chat = container.chat_service(user.id)

        async def forward(message) -> None:
            await ws.send_json(message.model_dump(mode="json"))

        chat.add_listener(forward)
        try:
            await chat.subscribe_to_conversation(conversation_id)
            async for _ in ws:
                pass  # client → server frames are ignored; the socket only pushes
        finally:
            await chat.close()
        return ws

    app = web.Application(middlewares=[error_middleware])
    app.router.add_get("/health", handle_health)
    app.router.add_get("/radius-options", handle_radius_options)
    app.router.add_get("/leagues", handle_leagues)
    app.router.add_get("/teams", handle_teams)
    app.router.add_get("/free-agents", handle_free_agents)
    app.router.add_put("/me/location", handle_set_location)
    app.router.add_get("/conversations", handle_conversations)
    app.router.add_post("/conversations/direct", handle_direct)
    app.router.add_post("/conversations/team", handle_team)
    app.router.add_get("/conversations/{conversation_id}/messages", handle_messages)
    app.router.add_post("/conversations/{conversation_id}/messages", handle_send_message)
    app.router.add_post("/conversations/{conversation_id}/read", handle_mark_read)
    app.router.add_post("/conversations/{conversation_id}/join", handle_join)
    app.router.add_get("/conversations/{conversation_id}/live", handle_live)
    return app
