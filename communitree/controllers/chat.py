"""Chat threads attached to NGOs and events."""

from __future__ import annotations

from ..core.enums import ChatContextType, MessageType
from ..core.errors import AuthenticationRequired, ChatThreadNotFound
from ..core.models import ChatContext, ChatThread, Message, User
from ..core.validation import validate_message_content
from ..data.actions import AddChatThread, MarkMessagesRead, SendMessage, UpdateUser
from ..data.store import AppStore


class ChatController:
    def __init__(self, store: AppStore) -> None:
        self.store = store

    def _user(self) -> User:
        user = self.store.state.user
        if user is None:
            raise AuthenticationRequired("User must be authenticated to chat")
        return user

    def find_thread(self, context_type: ChatContextType | str, reference_id: str) -> ChatThread | None:
        user = self.store.state.user
        for thread in self.store.state.chat_threads:
            if (
                thread.context.type == context_type
                and thread.context.reference_id == reference_id
                and (user is None or user.id in thread.participants)
            ):
                return thread
        return None

    def start_thread(
        self,
        context_type: ChatContextType | str,
        reference_id: str,
        title: str,
        participants: list[str] | None = None,
        description: str | None = None,
    ) -> ChatThread:
        """Open a thread about an NGO or event, reusing an existing one."""
        user = self._user()
        existing = self.find_thread(context_type, reference_id)
        if existing is not None:
            return existing

        members = [user.id, *(p for p in participants or [] if p != user.id)]
        now = self.store.clock()
        thread = ChatThread(
            participants=members,
            context=ChatContext(
                type=ChatContextType(context_type),
                reference_id=reference_id,
                title=title,
                description=description,
            ),
            last_activity=now,
            created_at=now,
            updated_at=now,
        )
        self.store.dispatch(AddChatThread(thread=thread))
        self.store.dispatch(UpdateUser(updates={"chat_history": [*user.chat_history, thread.id]}))
        return thread

    def send_message(
        self, thread_id: str, content: str, message_type: MessageType = MessageType.TEXT
    ) -> Message:
        """Validate ``content`` and append it to the thread as the current user."""
        user = self._user()
        if not any(thread.id == thread_id for thread in self.store.state.chat_threads):
            raise ChatThreadNotFound(f"No chat thread {thread_id}")
        message = Message(
            sender_id=user.id,
            content=validate_message_content(content),
            timestamp=self.store.clock(),
            type=message_type,
            is_read=True,
        )
        self.store.dispatch(SendMessage(thread_id=thread_id, message=message))
        return message

    def mark_thread_read(self, thread_id: str) -> None:
        user = self._user()
        for thread in self.store.state.chat_threads:
            if thread.id != thread_id:
                continue
            unread = [m.id for m in thread.messages if not m.is_read and m.sender_id != user.id]
            if unread:
                self.store.dispatch(MarkMessagesRead(thread_id=thread_id, message_ids=unread))
            return

    def unread_count(self) -> int:
        user = self.store.state.user
        if user is None:
            return 0
        return sum(
            1
            for thread in self.store.state.chat_threads
            if user.id in thread.participants
            for m in thread.messages
            if not m.is_read and m.sender_id != user.id
        )
