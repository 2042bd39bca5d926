from django.contrib import admin
from .models import Message, MessageAttachment


class MessageAttachmentInline(admin.TabularInline):
    model = MessageAttachment
    extra = 0
    readonly_fields = ['attachment_type', 'original_filename', 'file_size', 'mime_type', 'storage_key', 'public_url', 'created_at']


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ['id', 'chat', 'sender_id', 'body_preview', 'read', 'created_at']
    list_filter = ['read', 'created_at']
    search_fields = ['sender_id', 'body', 'chat__id']
    readonly_fields = ['id', 'chat', 'sender_id', 'created_at']
    inlines = [MessageAttachmentInline]

    def body_preview(self, obj):
        return obj.body[:50] + '...' if len(obj.body) > 50 else obj.body
    body_preview.short_description = 'Message'


@admin.register(MessageAttachment)
class MessageAttachmentAdmin(admin.ModelAdmin):
    list_display = ['id', 'message', 'attachment_type', 'original_filename', 'file_size', 'created_at']
    list_filter = ['attachment_type', 'created_at']
    search_fields = ['original_filename', 'storage_key']
