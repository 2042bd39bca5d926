import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction

from dmessages.models import Message
from homeswift.exceptions import Forbidden, NotFound, ValidationError
from homeswift.log_context import bind
from listings.services import get_property
from users.profiles import display_map, unknown_user
from utils.side_effects import BestEffort

from .models import ChatParticipant, Conversation, canonical_pair

logger = logging.getLogger(__name__)


class ConversationService:
    """
    Conversation lifecycle: membership checks, listing a user's chats and
    starting (or reusing) a chat between a renter and a landlord.
    """

    @staticmethod
    def get_conversation(chat_id):
        try:
            return Conversation.objects.get(pk=chat_id)
        except (Conversation.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFound('Conversation not found')

    @staticmethod
    def get_for_participant(chat_id, user_id):
        """Fetch a conversation the user belongs to, or raise NotFound/Forbidden."""
        chat = ConversationService.get_conversation(chat_id)
        if not chat.has_participant(user_id):
            raise Forbidden('User is not a participant in this chat')
        return chat

    @staticmethod
    def find_existing(prop, user_a, user_b):
        """
        Conversation about ``prop`` containing both users, if any.

        Narrow by property and the first user in the query, then check the
        second user on the candidates.
        """
        for chat in Conversation.objects.filter(property=prop).for_user(user_a):
            if chat.has_participant(user_b):
                return chat
        return None

    @staticmethod
    def list_conversations_for_user(user_id, log=None):
        """
        Summaries of every conversation ``user_id`` takes part in.

        Returns ``(summaries, warnings)``. Summaries are sorted by the time of
        their latest message, newest first. A conversation whose latest
        message or unread count cannot be read is still listed, with no last
        message and zero unread.
        """
        log = bind(logger, log)
        if not user_id:
            raise ValidationError('User ID is required')

        chats = list(Conversation.objects.for_user(user_id).select_related('property'))
        report = BestEffort(log)

        others = {chat.other_participant(user_id) for chat in chats}
        profiles = report.run('participant profiles', display_map, others, default={})

        summaries = []
        for chat in chats:
            latest, unread = report.run(
                f'latest message for chat {chat.id}',
                _latest_activity, chat, user_id,
                default=(None, 0),
            )
            other = chat.other_participant(user_id)
            summaries.append({
                'chat_id': str(chat.id),
                'property_id': str(chat.property_id) if chat.property_id else None,
                'property_title': chat.property.title if chat.property else None,
                'created_at': chat.created_at,
                'last_message': latest.body if latest else None,
                'last_message_time': latest.created_at if latest else chat.created_at,
                'unread_count': unread,
                'other_participant': profiles.get(other) or unknown_user(other),
            })

        summaries.sort(key=lambda s: s['last_message_time'], reverse=True)
        return summaries, report.warnings

    @staticmethod
    def start_or_get_conversation(user_a, user_b, property_id, log=None):
        """
        Return the conversation between ``user_a`` and the landlord ``user_b``
        about ``property_id``, creating it when none exists.

        Returns ``(result, warnings)`` where ``result`` carries ``existing: True``
        or ``new: True``.
        """
        log = bind(logger, log)
        if not user_a or not user_b:
            raise ValidationError('Both user IDs are required')
        if not property_id:
            raise ValidationError('Property ID is required')
        if user_a == user_b:
            raise ValidationError('Cannot start a conversation with yourself')

        prop = get_property(property_id)
        if prop.landlord_id != user_b:
            raise Forbidden('UserB is not the landlord of this property')

        existing = ConversationService.find_existing(prop, user_a, user_b)
        if existing:
            return _existing_result(existing), []

        participant_one, participant_two = canonical_pair(user_a, user_b)
        try:
            with transaction.atomic():
                chat = Conversation.objects.create(
                    property=prop,
                    participant_one=participant_one,
                    participant_two=participant_two,
                )
        except IntegrityError:
            # A concurrent request created the same chat first.
            existing = ConversationService.find_existing(prop, user_a, user_b)
            if existing is None:
                raise
            log.info("Chat for property %s already created concurrently: %s", prop.id, existing.id)
            return _existing_result(existing), []

        report = BestEffort(log)
        report.run(
            'chat participant rows',
            ChatParticipant.objects.bulk_create,
            [ChatParticipant(chat=chat, user_id=user_a), ChatParticipant(chat=chat, user_id=user_b)],
        )
        log.info("Created chat %s for property %s", chat.id, prop.id)

        return {
            'chat_id': str(chat.id),
            'property_id': str(prop.id),
            'created_at': chat.created_at,
            'new': True,
            'message': 'New chat created',
        }, report.warnings


def _latest_activity(chat, user_id):
    latest = Message.objects.filter(chat=chat).order_by('-created_at').first()
    unread = Message.objects.filter(chat=chat, read=False).exclude(sender_id=user_id).count()
    return latest, unread


def _existing_result(chat):
    return {
        'chat_id': str(chat.id),
        'existing': True,
        'message': 'Chat already exists between renter and landlord for this property',
    }
