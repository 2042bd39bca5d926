import asyncio
import json
import logging

import bleach
from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer
from django.conf import settings
from django.core.exceptions import ValidationError

from conversations.models import Conversation

from .notifications import chat_group, user_group

logger = logging.getLogger(__name__)


class ChatConsumer(AsyncWebsocketConsumer):
    """
    WebSocket consumer for realtime chat.

    Messages are sent over HTTP; this socket only delivers them. A client
    is always subscribed to its own user group and, after
    ``join_conversation``, to one chat group at a time.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = None
        self.user_group_name = None
        self.current_chat = None
        self.room_group_name = None
        self.heartbeat_task = None

    async def connect(self):
        self.user_id = self.scope.get('user_id')
        if not self.user_id:
            await self.close(code=4001)
            return

        self.user_group_name = user_group(self.user_id)
        await self.channel_layer.group_add(self.user_group_name, self.channel_name)
        await self.accept()

        self.heartbeat_task = asyncio.create_task(self.heartbeat_loop())
        logger.debug("WebSocket connected for user %s", self.user_id)

    async def disconnect(self, code):
        if self.heartbeat_task:
            self.heartbeat_task.cancel()

        await self.leave_chat_room()
        if self.user_group_name:
            await self.channel_layer.group_discard(self.user_group_name, self.channel_name)

    async def receive(self, text_data=None, bytes_data=None):
        if text_data is None:
            await self.send_error("Binary frames are not supported")
            return
        if len(text_data) > settings.WEBSOCKET_MAX_MESSAGE_SIZE:
            await self.send_error("Message too large")
            return

        try:
            data = json.loads(text_data)
        except json.JSONDecodeError:
            await self.send_error("Invalid JSON format")
            return
        if not isinstance(data, dict):
            await self.send_error("Invalid message format")
            return

        handler = {
            'join_conversation': self.handle_join_conversation,
            'leave_conversation': self.handle_leave_conversation,
            'typing_start': self.handle_typing_start,
            'typing_stop': self.handle_typing_stop,
            'heartbeat': self.handle_heartbeat,
        }.get(data.get('type'))

        if handler is None:
            await self.send_error("Unknown message type")
            return
        await handler(data)

    async def handle_join_conversation(self, data):
        chat_id = self.sanitize(data.get('chat_id') or data.get('conversation_id'))
        if not chat_id:
            await self.send_error("Chat ID required")
            return

        if not await self.verify_chat_access(chat_id):
            await self.send_error("Access denied to conversation")
            return

        await self.leave_chat_room()
        self.current_chat = chat_id
        self.room_group_name = chat_group(chat_id)
        await self.channel_layer.group_add(self.room_group_name, self.channel_name)

        await self.send_json({'type': 'conversation_joined', 'chat_id': chat_id})

    async def handle_leave_conversation(self, data):
        chat_id = self.current_chat
        await self.leave_chat_room()
        await self.send_json({'type': 'conversation_left', 'chat_id': chat_id})

    async def handle_typing_start(self, data):
        await self.broadcast_typing(True)

    async def handle_typing_stop(self, data):
        await self.broadcast_typing(False)

    async def handle_heartbeat(self, data):
        await self.send_json({
            'type': 'heartbeat_response',
            'timestamp': asyncio.get_running_loop().time(),
        })

    async def broadcast_typing(self, is_typing):
        if not self.room_group_name:
            return

        await self.channel_layer.group_send(
            self.room_group_name,
            {
                'type': 'typing',
                'user_id': self.user_id,
                'chat_id': self.current_chat,
                'is_typing': is_typing,
                'sender_channel': self.channel_name,
            }
        )

    # Channel layer event handlers

    async def chat_message(self, event):
        await self.send_json({'type': 'chat_message', 'message': event['message']})

    async def chat_notification(self, event):
        # Already delivered through the chat group.
        if event.get('chat_id') == self.current_chat:
            return
        await self.send_json({
            'type': 'chat_notification',
            'chat_id': event['chat_id'],
            'message': event['message'],
        })

    async def typing(self, event):
        if event.get('sender_channel') == self.channel_name:
            return
        await self.send_json({
            'type': 'typing_start' if event['is_typing'] else 'typing_stop',
            'user_id': event['user_id'],
            'chat_id': event['chat_id'],
        })

    # Helpers

    async def leave_chat_room(self):
        if self.room_group_name:
            await self.channel_layer.group_discard(self.room_group_name, self.channel_name)
        self.room_group_name = None
        self.current_chat = None

    async def heartbeat_loop(self):
        """Send a periodic heartbeat to keep idle connections open."""
        while True:
            try:
                await asyncio.sleep(settings.WEBSOCKET_HEARTBEAT_INTERVAL)
                await self.send_json({
                    'type': 'heartbeat',
                    'timestamp': asyncio.get_running_loop().time(),
                })
            except asyncio.CancelledError:
                break

    async def send_json(self, content):
        await self.send(text_data=json.dumps(content))

    async def send_error(self, message):
        await self.send_json({'type': 'error', 'message': message})

    @database_sync_to_async
    def verify_chat_access(self, chat_id):
        """Whether the connected user takes part in ``chat_id``."""
        try:
            return Conversation.objects.filter(pk=chat_id).for_user(self.user_id).exists()
        except (ValidationError, ValueError):
            return False

    @staticmethod
    def sanitize(value):
        if value is None:
            return ''
        return bleach.clean(str(value), tags=[], attributes={}, strip=True).strip()
