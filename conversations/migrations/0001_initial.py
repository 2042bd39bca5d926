import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('listings', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Conversation',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('participant_one', models.CharField(max_length=100)),
                ('participant_two', models.CharField(max_length=100)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('property', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='conversations', to='listings.property')),
            ],
            options={
                'db_table': 'chats',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['participant_one'], name='chats_participant_one_idx'),
                    models.Index(fields=['participant_two'], name='chats_participant_two_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('property', 'participant_one', 'participant_two'), name='unique_chat_per_property_pair'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ChatParticipant',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('user_id', models.CharField(max_length=100)),
                ('joined_at', models.DateTimeField(auto_now_add=True)),
                ('chat', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='participant_rows', to='conversations.conversation')),
            ],
            options={
                'db_table': 'chat_participants',
                'constraints': [
                    models.UniqueConstraint(fields=('chat', 'user_id'), name='unique_chat_participant'),
                ],
            },
        ),
    ]
