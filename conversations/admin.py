from django.contrib import admin
from .models import ChatParticipant, Conversation


@admin.register(Conversation)
class ConversationAdmin(admin.ModelAdmin):
    list_display = ['id', 'property', 'participant_one', 'participant_two', 'created_at']
    list_filter = ['created_at']
    search_fields = ['id', 'participant_one', 'participant_two', 'property__title']
    readonly_fields = ['id', 'property', 'participant_one', 'participant_two', 'created_at']

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('property')


@admin.register(ChatParticipant)
class ChatParticipantAdmin(admin.ModelAdmin):
    list_display = ['id', 'chat', 'user_id', 'joined_at']
    search_fields = ['user_id', 'chat__id']
    readonly_fields = ['joined_at']
