import uuid

from django.db import models


class Message(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    chat = models.ForeignKey('conversations.Conversation', on_delete=models.CASCADE, related_name='messages')
    sender_id = models.CharField(max_length=100)
    body = models.TextField(blank=True)
    read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'messages'
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['chat', 'created_at'], name='messages_chat_created_idx'),
            models.Index(fields=['chat', 'read'], name='messages_chat_read_idx'),
        ]

    def __str__(self):
        return f"{self.sender_id}: {self.body[:50]}..."


class MessageAttachment(models.Model):
    ATTACHMENT_TYPE_CHOICES = [
        ("image", "Image"),
        ("video", "Video"),
        ("audio", "Audio"),
        ("file", "File"),
    ]

    message = models.ForeignKey(Message, on_delete=models.CASCADE, related_name="attachments")
    attachment_type = models.CharField(
        max_length=10, choices=ATTACHMENT_TYPE_CHOICES, default="file"
    )
    original_filename = models.CharField(max_length=255)
    file_size = models.BigIntegerField(null=True, blank=True)
    mime_type = models.CharField(max_length=100)
    storage_key = models.CharField(max_length=500, unique=True)
    public_url = models.CharField(max_length=1000)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'message_attachments'
        ordering = ['created_at']

    def get_file_size_mb(self):
        """Get file size in MB"""
        if self.file_size:
            return round(self.file_size / (1024 * 1024), 2)
        return None

    def __str__(self):
        return f"{self.attachment_type} attachment for message {self.message_id}"
