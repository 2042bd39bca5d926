from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from homeswift.log_context import logger_for
from homeswift.permissions import resolve_acting_user

from .serializers import ConversationSummarySerializer, StartChatSerializer
from .services import ConversationService, logger

PARTIAL_FAILURE_HEADER = "X-Partial-Failure"


def with_warnings(payload, warnings):
    if warnings:
        payload['warnings'] = warnings
    return payload


class UserChatListView(APIView):
    """List all conversations for a specific user"""

    def get(self, request, user_id):
        user_id = resolve_acting_user(request, user_id)
        summaries, warnings = ConversationService.list_conversations_for_user(user_id, log=logger_for(request, logger))

        response = Response(ConversationSummarySerializer(summaries, many=True).data)
        if warnings:
            # The body stays a plain list; degraded rows are flagged out of band.
            response[PARTIAL_FAILURE_HEADER] = str(len(warnings))
        return response


class StartChatView(APIView):
    """Create a conversation between a renter and a landlord or find the existing one"""

    def post(self, request):
        serializer = StartChatSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user_a = resolve_acting_user(request, serializer.validated_data.get('userA'))

        result, warnings = ConversationService.start_or_get_conversation(
            user_a,
            serializer.validated_data['userB'],
            serializer.validated_data['property_id'],
            log=logger_for(request, logger),
        )

        status_code = status.HTTP_201_CREATED if result.get('new') else status.HTTP_200_OK
        return Response(with_warnings(result, warnings), status=status_code)
