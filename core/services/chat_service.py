"""
Chat service - conversation list, message history and live updates for one user.

Thin facade over the hosted backend: persistence, ordering of concurrent
writes and delivery are the backend's job. This class only keeps the state
the UI binds to.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, List

from core.domain.models import (
    ConversationType, ConversationWithDetails,
    Message, MessageCreate, MessageType, MessageWithSender, Sender,
)
from core.interfaces.repositories import IChatRepository, ITeamRepository
from core.interfaces.realtime import IMessageSubscriber, ISubscription
from locales import t

logger = logging.getLogger(__name__)


class ChatService:
    """Per-user chat state plus the operations that change it."""

    def __init__(
        self,
        chat_repo: IChatRepository,
        team_repo: ITeamRepository,
        subscriber: Optional[IMessageSubscriber],
        user_id: Optional[str],
    ):
        self.chat_repo = chat_repo
        self.team_repo = team_repo
        self.subscriber = subscriber
        self.user_id = user_id

        self.conversations: List[ConversationWithDetails] = []
        self.active_conversation: Optional[ConversationWithDetails] = None
        self.messages: List[MessageWithSender] = []
        self.loading = False
        self.total_unread_count = 0
        self._subscription: Optional[ISubscription] = None
        self._listeners: List[Callable[[MessageWithSender], Awaitable[None]]] = []

    def _require_user(self) -> str:
        if not self.user_id:
            raise PermissionError("User not authenticated")
        return self.user_id

    # === CONVERSATIONS ===

    async def load_conversations(self) -> None:
        """Refresh the conversation list and unread totals. Failures keep the old list."""
        if not self.user_id:
            return

        self.loading = True
        try:
            conversation_ids = await self.chat_repo.get_conversation_ids(self.user_id)
            if not conversation_ids:
                self.conversations = []
                self.total_unread_count = 0
                return

            rows = await self.chat_repo.get_conversations(conversation_ids)
            detailed = await asyncio.gather(
                *(self._with_details(conversation, team_name) for conversation, team_name in rows)
            )

            self.conversations = list(detailed)
            self.total_unread_count = sum(c.unread_count for c in self.conversations)
        except Exception as e:
            logger.error(f"[CHAT] Error loading conversations for {self.user_id}: {e}")
        finally:
            self.loading = False

    async def _with_details(self, conversation, team_name: Optional[str]) -> ConversationWithDetails:
        last_message, participants, unread = await asyncio.gather(
            self.chat_repo.get_last_message(conversation.id),
            self.chat_repo.get_participants(conversation.id),
            self.chat_repo.get_unread_count(conversation.id, self.user_id),
        )
        return ConversationWithDetails(
            **conversation.model_dump(),
            last_message=last_message,
            participants=participants,
            unread_count=unread or 0,
            team_name=team_name,
        )

    def set_active_conversation(self, conversation: Optional[ConversationWithDetails]) -> None:
        self.active_conversation = conversation

    async def create_direct_conversation(self, other_user_id: str) -> str:
        user_id = self._require_user()
        try:
            conversation_id = await self.chat_repo.get_or_create_direct_conversation(
                user_id, other_user_id
            )
        except Exception as e:
            logger.error(f"[CHAT] Error creating direct conversation with {other_user_id}: {e}")
            raise

        await self.load_conversations()
        return conversation_id

    async def create_team_conversation(self, team_id: str, team_name: str) -> str:
        """Reuse the team's conversation, or create it with roster + manager as participants."""
        self._require_user()
        try:
            existing = await self.chat_repo.find_team_conversation(team_id)
            if existing:
                return existing

            team = await self.team_repo.get_by_id(team_id)
            if team is None:
                raise ValueError(f"Team {team_id} not found")
            member_ids = await self.team_repo.get_member_ids(team_id)

            conversation = await self.chat_repo.create_conversation(
                ConversationType.TEAM.value,
                t("team_chat_title", team_name=team_name),
                team_id=team_id,
            )

            participant_ids = list(dict.fromkeys(member_ids))
            if team.manager_id and team.manager_id not in participant_ids:
                participant_ids.append(team.manager_id)
            await self.chat_repo.add_participants(conversation.id, participant_ids)
        except Exception as e:
            logger.error(f"[CHAT] Error creating team conversation for team {team_id}: {e}")
            raise

        logger.info(f"[CHAT] Created team conversation {conversation.id} with {len(participant_ids)} participants")
        await self.load_conversations()
        return conversation.id

    async def join_league_conversation(self, conversation_id: str) -> None:
        user_id = self._require_user()
        try:
            await self.chat_repo.add_participants(conversation_id, [user_id])
        except Exception as e:
            logger.error(f"[CHAT] Error joining league conversation {conversation_id}: {e}")
            raise

        await self.load_conversations()

    async def mark_as_read(self, conversation_id: str) -> None:
        if not self.user_id:
            return

        try:
            await self.chat_repo.mark_messages_read(conversation_id, self.user_id)
        except Exception as e:
            logger.error(f"[CHAT] Error marking {conversation_id} as read: {e}")
            return

        cleared = 0
        for conversation in self.conversations:
            if conversation.id == conversation_id:
                cleared += conversation.unread_count
                conversation.unread_count = 0
        self.total_unread_count = max(0, self.total_unread_count - cleared)

    # === MESSAGES ===

    async def load_messages(self, conversation_id: str) -> None:
        """Load full history, oldest first. Failures keep the old messages."""
        if not self.user_id:
            return

        self.loading = True
        try:
            rows = await self.chat_repo.get_messages(conversation_id)
            self.messages = [
                MessageWithSender(**message.model_dump(), sender=sender or Sender())
                for message, sender in rows
            ]
        except Exception as e:
            logger.error(f"[CHAT] Error loading messages for {conversation_id}: {e}")
        finally:
            self.loading = False

    async def send_message(
        self,
        conversation_id: str,
        content: Optional[str],
        message_type: MessageType = MessageType.TEXT,
        image_url: Optional[str] = None,
    ) -> Optional[Message]:
        """Insert a message. New messages reach the list through the subscription."""
        if not self.user_id:
            return None

        try:
            return await self.chat_repo.insert_message(MessageCreate(
                conversation_id=conversation_id,
                sender_id=self.user_id,
                content=content,
                message_type=message_type,
                image_url=image_url,
            ))
        except Exception as e:
            logger.error(f"[CHAT] Error sending message to {conversation_id}: {e}")
            raise

    # === LIVE UPDATES ===

    async def subscribe_to_conversation(self, conversation_id: str) -> None:
        """Replace any existing subscription with one for this conversation."""
        await self.unsubscribe_from_conversation()
        if self.subscriber is None:
            logger.debug("[CHAT] Realtime disabled, not subscribing")
            return

        self._subscription = await self.subscriber.subscribe(conversation_id, self._on_new_message)
        logger.info(f"[CHAT] Subscribed to conversation {conversation_id}")

    async def unsubscribe_from_conversation(self) -> None:
        if self._subscription is None:
            return
        subscription, self._subscription = self._subscription, None
        await subscription.unsubscribe()

    async def _on_new_message(self, message: Message) -> None:
        try:
            sender = await self.chat_repo.get_sender(message.sender_id)
        except Exception as e:
            logger.warning(f"[CHAT] Sender lookup failed for {message.sender_id}: {e}")
            sender = None

        incoming = MessageWithSender(
            **message.model_dump(),
            sender=sender or Sender(id=message.sender_id),
        )
        self.messages.append(incoming)
        for listener in list(self._listeners):
            try:
                await listener(incoming)
            except Exception as e:
                logger.warning(f"[CHAT] Listener failed for message {incoming.id}: {e}")

    def add_listener(self, listener: Callable[[MessageWithSender], Awaitable[None]]) -> None:
        """Be told about each live message after it is appended."""
        self._listeners.append(listener)

    async def close(self) -> None:
        await self.unsubscribe_from_conversation()
