from rest_framework import serializers


class StartChatSerializer(serializers.Serializer):
    """Body of ``POST /start/``: renter ``userA`` contacts landlord ``userB``."""
    userA = serializers.CharField(max_length=100, required=False, allow_blank=True)
    userB = serializers.CharField(max_length=100)
    property_id = serializers.UUIDField()


class ParticipantSerializer(serializers.Serializer):
    id = serializers.CharField()
    full_name = serializers.CharField()
    avatar_url = serializers.CharField(allow_null=True)
    user_type = serializers.CharField(allow_null=True)


class ConversationSummarySerializer(serializers.Serializer):
    """Lightweight row for the chat list (no messages)."""
    chat_id = serializers.CharField()
    property_id = serializers.CharField(allow_null=True)
    property_title = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField()
    last_message = serializers.SerializerMethodField()
    last_message_time = serializers.DateTimeField()
    unread_count = serializers.IntegerField()
    other_participant = ParticipantSerializer()

    def get_last_message(self, obj):
        """Preview only; long bodies are cut at 100 characters."""
        body = obj.get('last_message')
        if body is None:
            return None
        return body[:100] + '...' if len(body) > 100 else body
