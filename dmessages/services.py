import html
import logging

import bleach
from django.db import DatabaseError

from conversations.models import Conversation
from conversations.services import ConversationService
from homeswift.exceptions import ValidationError
from homeswift.log_context import bind
from users.profiles import display_for, display_map, unknown_user
from utils.side_effects import BestEffort
from utils.uploads import attachment_storage_key, attachment_type_for
from websocket_chat.notifications import notify_new_message

from . import storage
from .models import Message, MessageAttachment
from .serializers import MessageSerializer

logger = logging.getLogger(__name__)


def sanitize_body(body):
    """Strip markup from a message body and trim surrounding whitespace."""
    if not body:
        return ''
    # bleach escapes the text it keeps; store what the user typed.
    return html.unescape(bleach.clean(str(body), tags=[], attributes={}, strip=True)).strip()


class MessageService:
    """
    Message lifecycle: listing (with read-on-fetch), sending with
    attachments, and explicit mark-as-read.
    """

    @staticmethod
    def list_messages(chat_id, user_id, limit=None, offset=0, log=None):
        """
        Messages of a chat, oldest first, plus the chat's context.

        Fetching acknowledges the other party's unread messages: their ids are
        collected from this page and flipped to read in one update. The
        returned messages show the state as fetched. Returns
        ``(result, warnings)`` where ``result`` holds ``messages``,
        ``chatContext`` and ``senders``.
        """
        log = bind(logger, log)
        if not chat_id:
            raise ValidationError('Chat ID is required')
        chat = ConversationService.get_for_participant(chat_id, user_id)

        queryset = Message.objects.filter(chat=chat).prefetch_related('attachments').order_by('created_at')
        if limit is not None:
            queryset = queryset[offset:offset + limit]
        elif offset:
            queryset = queryset[offset:]
        messages = list(queryset)

        report = BestEffort(log)
        unread_ids = [m.id for m in messages if not m.read and m.sender_id != user_id]
        if unread_ids:
            marked = report.run('mark fetched messages read', _mark_ids_read, unread_ids, default=0)
            log.debug("Marked %s of %s fetched messages read in chat %s", marked, len(unread_ids), chat.id)

        context = report.run('chat context', _chat_context, chat)
        senders = report.run('sender profiles', display_map, {m.sender_id for m in messages}, default={})

        return {
            'messages': messages,
            'chatContext': context,
            'senders': senders,
        }, report.warnings

    @staticmethod
    def send_message(chat_id, sender_id, body, attachments=None, log=None):
        """
        Store a message from a participant and its attachments.

        The message row is written first; each attachment is then uploaded
        and recorded on its own, and one that fails is skipped. Returns
        ``(message, senders, warnings)``; the realtime event carries the
        serialized message.
        """
        log = bind(logger, log)
        if not chat_id or not sender_id:
            raise ValidationError('Chat ID and sender ID are required')

        body = sanitize_body(body)
        attachments = list(attachments or [])
        if not body and not attachments:
            raise ValidationError('Message must have content or at least one attachment.')

        chat = ConversationService.get_for_participant(chat_id, sender_id)
        message = Message.objects.create(chat=chat, sender_id=sender_id, body=body, read=False)

        report = BestEffort(log)
        stored = 0
        for upload in attachments:
            if report.run(f'attachment {upload.name}', _store_attachment, message, upload) is not None:
                stored += 1

        sender = report.run('sender profile', display_for, sender_id, default=None) or unknown_user(sender_id)
        senders = {sender_id: sender}
        payload = MessageSerializer(message, context={'senders': senders}).data

        report.run('realtime fan-out', notify_new_message, chat, payload, atomic=False)
        log.info("Message %s sent in chat %s (%d/%d attachments stored)", message.id, chat.id, stored, len(attachments))

        return message, senders, report.warnings

    @staticmethod
    def mark_messages_read(chat_id, user_id, log=None):
        """Mark every message from the other participant as read. Idempotent."""
        log = bind(logger, log)
        if not chat_id or not user_id:
            raise ValidationError('Chat ID and user ID are required')

        chat = ConversationService.get_for_participant(chat_id, user_id)
        marked = Message.objects.filter(chat=chat, read=False).exclude(sender_id=user_id).update(read=True)
        log.debug("Marked %s messages read in chat %s for %s", marked, chat.id, user_id)

        return {'success': True, 'message': 'Messages marked as read', 'marked_read': marked}

    @staticmethod
    def count_unread_for_user(user_id):
        """Unread messages from other senders across all of the user's chats."""
        if not user_id:
            raise ValidationError('User ID is required')
        return Message.objects.filter(
            chat__in=Conversation.objects.for_user(user_id),
            read=False,
        ).exclude(sender_id=user_id).count()


def _mark_ids_read(message_ids):
    return Message.objects.filter(id__in=message_ids, read=False).update(read=True)


def _chat_context(chat):
    prop = chat.property
    profiles = display_map(chat.participants)
    return {
        'property': prop.as_context() if prop else None,
        'participants': [profiles[uid] for uid in chat.participants],
        'isLandlordChat': bool(prop and chat.has_participant(prop.landlord_id)),
    }


def _store_attachment(message, upload):
    content_type = (getattr(upload, 'content_type', '') or 'application/octet-stream').lower()
    key = attachment_storage_key(message.chat_id, upload.name)
    saved_key, public_url = storage.upload(key, b"".join(upload.chunks()), content_type)

    try:
        return MessageAttachment.objects.create(
            message=message,
            attachment_type=attachment_type_for(content_type),
            original_filename=upload.name,
            file_size=upload.size,
            mime_type=content_type,
            storage_key=saved_key,
            public_url=public_url,
        )
    except DatabaseError:
        # No row points at the blob, so remove it before reporting the failure.
        try:
            storage.delete(saved_key)
        except OSError as e:
            logger.warning("Could not remove orphaned attachment %s: %s", saved_key, e)
        raise
