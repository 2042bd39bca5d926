import builtins
import uuid

from django.db import models
from django.db.models import Q


def canonical_pair(user_a, user_b):
    """Participants are stored sorted so the pair is order-independent."""
    return tuple(sorted((str(user_a), str(user_b))))


class ConversationQuerySet(models.QuerySet):
    def for_user(self, user_id):
        return self.filter(Q(participant_one=user_id) | Q(participant_two=user_id))


class Conversation(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    property = models.ForeignKey(
        'listings.Property', on_delete=models.SET_NULL, related_name='conversations', null=True, blank=True
    )
    participant_one = models.CharField(max_length=100)
    participant_two = models.CharField(max_length=100)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = ConversationQuerySet.as_manager()

    class Meta:
        db_table = 'chats'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['property', 'participant_one', 'participant_two'],
                name='unique_chat_per_property_pair',
            ),
        ]
        indexes = [
            models.Index(fields=['participant_one'], name='chats_participant_one_idx'),
            models.Index(fields=['participant_two'], name='chats_participant_two_idx'),
        ]

    def __str__(self):
        return f"Conversation {self.id}"

    # ``property`` is the foreign key inside this class body.
    @builtins.property
    def participants(self):
        return [self.participant_one, self.participant_two]

    def has_participant(self, user_id):
        return user_id in self.participants

    def other_participant(self, user_id):
        if user_id == self.participant_one:
            return self.participant_two
        if user_id == self.participant_two:
            return self.participant_one
        return None


class ChatParticipant(models.Model):
    """Legacy membership rows, written best effort next to ``Conversation``."""
    chat = models.ForeignKey(Conversation, on_delete=models.CASCADE, related_name='participant_rows')
    user_id = models.CharField(max_length=100)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'chat_participants'
        constraints = [
            models.UniqueConstraint(fields=['chat', 'user_id'], name='unique_chat_participant'),
        ]

    def __str__(self):
        return f"{self.user_id} in {self.chat_id}"
