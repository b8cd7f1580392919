"""
Supabase Realtime subscriber - new rows in `messages` for one conversation.

The sync client used by the repositories has no realtime support, so this
module owns a separate async client created on first subscribe.
"""

import asyncio
import logging
from typing import Callable, Optional, Set

from supabase import acreate_client, AsyncClient

from config.settings import settings
from core.domain.models import Message
from core.interfaces.realtime import IMessageSubscriber, ISubscription, MessageCallback

logger = logging.getLogger(__name__)


def extract_record(payload: dict) -> Optional[dict]:
    """Pull the inserted row out of a postgres_changes payload."""
    if not isinstance(payload, dict):
        return None
    data = payload.get("data")
    if isinstance(data, dict) and isinstance(data.get("record"), dict):
        return data["record"]
    if isinstance(payload.get("new"), dict):
        return payload["new"]
    if isinstance(payload.get("record"), dict):
        return payload["record"]
    return None


class SupabaseSubscription(ISubscription):

    def __init__(self, client: AsyncClient, channel, conversation_id: str):
        self._client = client
        self._channel = channel
        self.conversation_id = conversation_id
        self._tasks: Set[asyncio.Task] = set()

    def track(self, task: asyncio.Task) -> None:
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning(f"[REALTIME] Message callback failed on {self.conversation_id}: {error}")

    async def unsubscribe(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        await self._client.remove_channel(self._channel)
        logger.info(f"[REALTIME] Unsubscribed from conversation {self.conversation_id}")


class SupabaseMessageSubscriber(IMessageSubscriber):
    """Realtime INSERT listener on the messages table"""

    def __init__(self, parse_message: Callable[[dict], Message], client: Optional[AsyncClient] = None):
        self._parse_message = parse_message
        self._client = client
        self._lock = asyncio.Lock()

    async def _get_client(self) -> AsyncClient:
        async with self._lock:
            if self._client is None:
                if not settings.supabase_url or not settings.supabase_credential:
                    raise RuntimeError("Supabase credentials not configured")
                self._client = await acreate_client(settings.supabase_url, settings.supabase_credential)
            return self._client

    async def subscribe(self, conversation_id: str, callback: MessageCallback) -> ISubscription:
        client = await self._get_client()
        channel = client.channel(f"conversation:{conversation_id}")
        subscription = SupabaseSubscription(client, channel, conversation_id)

        def on_insert(payload):
            record = extract_record(payload)
            if record is None:
                logger.warning(f"[REALTIME] Unexpected payload on {conversation_id}: {payload}")
                return
            try:
                message = self._parse_message(record)
            except Exception as e:
                logger.warning(f"[REALTIME] Could not parse message on {conversation_id}: {e}")
                return
            subscription.track(asyncio.ensure_future(callback(message)))

        channel.on_postgres_changes(
            "INSERT",
            schema=settings.db_schema,
            table="messages",
            filter=f"conversation_id=eq.{conversation_id}",
            callback=on_insert,
        )
        await channel.subscribe()
        logger.info(f"[REALTIME] Subscribed to conversation {conversation_id}")
        return subscription
