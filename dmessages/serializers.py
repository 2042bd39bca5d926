from django.conf import settings
from rest_framework import serializers

from users.profiles import unknown_user

from .models import Message, MessageAttachment


class MessageAttachmentSerializer(serializers.ModelSerializer):
    file_url = serializers.SerializerMethodField()
    file_size_mb = serializers.SerializerMethodField()

    class Meta:
        model = MessageAttachment
        fields = ["id", "attachment_type", "original_filename", "file_size", "file_size_mb",
                  "mime_type", "storage_key", "file_url", "created_at"]

    def get_file_url(self, obj):
        request = self.context.get('request')
        if request is not None:
            return request.build_absolute_uri(obj.public_url)
        return obj.public_url

    def get_file_size_mb(self, obj):
        return obj.get_file_size_mb()


class MessageSerializer(serializers.ModelSerializer):
    chat_id = serializers.CharField(read_only=True)
    message = serializers.CharField(source='body', read_only=True)
    attachments = MessageAttachmentSerializer(many=True, read_only=True)
    sender = serializers.SerializerMethodField()

    class Meta:
        model = Message
        fields = ['id', 'chat_id', 'sender_id', 'message', 'read', 'created_at', 'attachments', 'sender']
        read_only_fields = fields

    def get_sender(self, obj):
        """Sender display data from the ``senders`` map passed in context."""
        senders = self.context.get('senders') or {}
        return senders.get(obj.sender_id) or unknown_user(obj.sender_id)


class WhitespaceAllowedCharField(serializers.CharField):
    """CharField that keeps whitespace-only content so the service can judge it"""

    def __init__(self, **kwargs):
        kwargs.setdefault('allow_blank', True)
        kwargs.setdefault('trim_whitespace', False)
        super().__init__(**kwargs)


class SendMessageSerializer(serializers.Serializer):
    """Body of ``POST /``: JSON or multipart with ``attachments`` files."""
    chat_id = serializers.UUIDField()
    sender_id = serializers.CharField(max_length=100, required=False, allow_blank=True)
    message = WhitespaceAllowedCharField(required=False, default='')
    attachments = serializers.ListField(
        child=serializers.FileField(allow_empty_file=False),
        required=False,
        default=list,
    )

    def validate_attachments(self, value):
        max_files = settings.CHAT_ATTACHMENT_MAX_FILES
        max_size = settings.CHAT_ATTACHMENT_MAX_SIZE
        allowed_types = settings.CHAT_ATTACHMENT_ALLOWED_TYPES

        if len(value) > max_files:
            raise serializers.ValidationError(f"At most {max_files} files can be attached to a message.")
        for upload in value:
            if upload.size > max_size:
                raise serializers.ValidationError(
                    f"{upload.name} is too large. Maximum size is {max_size // (1024 * 1024)}MB."
                )
            content_type = (getattr(upload, 'content_type', '') or '').lower()
            if content_type not in allowed_types:
                raise serializers.ValidationError(f"File type {content_type or 'unknown'} is not allowed.")
        return value

    def validate(self, attrs):
        if not attrs.get('message', '').strip() and not attrs.get('attachments'):
            raise serializers.ValidationError("Message must have content or at least one attachment.")
        return attrs


class MarkReadSerializer(serializers.Serializer):
    user_id = serializers.CharField(max_length=100, required=False, allow_blank=True)
