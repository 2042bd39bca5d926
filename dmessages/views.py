from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from conversations.views import with_warnings
from homeswift.exceptions import ValidationError
from homeswift.log_context import logger_for
from homeswift.permissions import resolve_acting_user

from .serializers import MarkReadSerializer, MessageSerializer, SendMessageSerializer
from .services import MessageService, logger


def _paging(request):
    """Optional ``limit``/``offset`` query parameters."""
    try:
        limit = request.query_params.get('limit')
        limit = int(limit) if limit not in (None, '') else None
        offset = int(request.query_params.get('offset') or 0)
    except ValueError:
        raise ValidationError('limit and offset must be integers')
    if (limit is not None and limit < 1) or offset < 0:
        raise ValidationError('limit must be positive and offset non-negative')
    return limit, offset


class MessageListView(APIView):
    """Messages of a chat with its context; fetching marks the other party's messages read"""

    def get(self, request, chat_id):
        user_id = resolve_acting_user(request)
        limit, offset = _paging(request)

        result, warnings = MessageService.list_messages(
            chat_id, user_id, limit=limit, offset=offset, log=logger_for(request, logger),
        )
        messages = MessageSerializer(
            result['messages'], many=True,
            context={'request': request, 'senders': result['senders']},
        ).data

        return Response(with_warnings({
            'messages': messages,
            'chatContext': result['chatContext'],
        }, warnings))


class SendMessageView(APIView):
    """Send a text message and/or attachments to a chat"""

    def post(self, request):
        serializer = SendMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        sender_id = resolve_acting_user(request, data.get('sender_id'))

        message, senders, warnings = MessageService.send_message(
            str(data['chat_id']),
            sender_id,
            data.get('message', ''),
            data.get('attachments'),
            log=logger_for(request, logger),
        )

        payload = MessageSerializer(message, context={'request': request, 'senders': senders}).data
        return Response(with_warnings({
            'message': 'Message sent',
            'data': payload,
        }, warnings), status=status.HTTP_201_CREATED)


class MarkReadView(APIView):
    def put(self, request, chat_id):
        serializer = MarkReadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user_id = resolve_acting_user(request, serializer.validated_data.get('user_id'))

        result = MessageService.mark_messages_read(chat_id, user_id, log=logger_for(request, logger))
        return Response(result)


class UnreadCountView(APIView):
    """Total unread messages for a user across all their chats"""

    def get(self, request, user_id):
        user_id = resolve_acting_user(request, user_id)
        return Response({'unread_count': MessageService.count_unread_for_user(user_id)})
