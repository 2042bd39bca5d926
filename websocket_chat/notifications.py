"""
Channel-layer groups and server-side event publishing.

Every socket joins its user's group on connect and may join one chat group
at a time. HTTP handlers publish through ``notify_new_message``.
"""

import json
import logging
import re

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.core.serializers.json import DjangoJSONEncoder

logger = logging.getLogger(__name__)

_UNSAFE_GROUP_CHARS = re.compile(r'[^0-9A-Za-z_.-]')


def _group_name(prefix, value):
    # Group names are limited to ASCII alphanumerics, hyphens, underscores
    # and periods, and must stay under 100 characters.
    return f"{prefix}_{_UNSAFE_GROUP_CHARS.sub('_', str(value))}"[:99]


def user_group(user_id):
    return _group_name('user', user_id)


def chat_group(chat_id):
    return _group_name('chat', chat_id)


def _plain(payload):
    """Round-trip through JSON so the layer only carries msgpack-safe values."""
    return json.loads(json.dumps(payload, cls=DjangoJSONEncoder))


def notify_new_message(chat, payload):
    """
    Publish a stored message to the chat group and the recipient's user group.

    Raises whatever the channel layer raises; callers treat publishing as
    best effort.
    """
    channel_layer = get_channel_layer()
    if channel_layer is None:
        logger.debug("No channel layer configured; skipping fan-out for chat %s", chat.id)
        return False

    message = _plain(payload)
    send = async_to_sync(channel_layer.group_send)
    send(chat_group(chat.id), {'type': 'chat_message', 'message': message})

    recipient = chat.other_participant(message.get('sender_id'))
    if recipient:
        send(user_group(recipient), {
            'type': 'chat_notification',
            'chat_id': str(chat.id),
            'message': message,
        })
    return True
