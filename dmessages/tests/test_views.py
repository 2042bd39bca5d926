import os
import shutil
import uuid
from unittest.mock import patch

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from conversations.models import Conversation
from dmessages.models import Message
from homeswift.jwt_utils import generate_test_token
from listings.models import Property

from .helpers import TEST_MEDIA_DIR, png_upload


class MessageAPITestCase(APITestCase):
    def setUp(self):
        self.property = Property.objects.create(title="Studio", landlord_id="landlord1")
        self.chat = Conversation.objects.create(
            property=self.property, participant_one="landlord1", participant_two="renter1"
        )
        self.authenticate("renter1")

    def authenticate(self, user_id):
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {generate_test_token(user_id)}')


class MessageListViewTest(MessageAPITestCase):
    def url(self, chat_id=None):
        return reverse('dmessages:chat-messages', args=[chat_id or self.chat.id])

    def test_lists_messages_with_context(self):
        Message.objects.create(chat=self.chat, sender_id="landlord1", body="Welcome")

        response = self.client.get(self.url())

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['messages']), 1)
        message = response.data['messages'][0]
        self.assertEqual(message['message'], "Welcome")
        self.assertFalse(message['read'])
        self.assertEqual(message['sender']['id'], "landlord1")
        self.assertEqual(response.data['chatContext']['property']['title'], "Studio")
        self.assertNotIn('warnings', response.data)
        self.assertTrue(Message.objects.get().read)

    def test_outsider_is_forbidden(self):
        self.authenticate("outsider")
        response = self.client.get(self.url())

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data, {'error': 'User is not a participant in this chat'})

    def test_unknown_chat_is_404(self):
        response = self.client.get(self.url(uuid.uuid4()))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_bad_paging_is_400(self):
        response = self.client.get(self.url(), {'limit': 'abc'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_context_failure_reported_as_warning(self):
        with patch('dmessages.services._chat_context', side_effect=RuntimeError("boom")):
            response = self.client.get(self.url())

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data['chatContext'])
        self.assertEqual(response.data['warnings'][0]['task'], 'chat context')


@override_settings(MEDIA_ROOT=TEST_MEDIA_DIR)
class SendMessageViewTest(MessageAPITestCase):
    def setUp(self):
        super().setUp()
        self.url = reverse('dmessages:message-send')
        os.makedirs(TEST_MEDIA_DIR, exist_ok=True)

    def tearDown(self):
        if os.path.exists(TEST_MEDIA_DIR):
            shutil.rmtree(TEST_MEDIA_DIR)

    def test_send_text_message(self):
        response = self.client.post(self.url, {
            'chat_id': str(self.chat.id), 'message': 'Is the studio still available?',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['message'], 'Message sent')
        self.assertEqual(response.data['data']['message'], 'Is the studio still available?')
        self.assertEqual(response.data['data']['sender_id'], 'renter1')
        self.assertFalse(response.data['data']['read'])

    def test_send_with_attachment(self):
        response = self.client.post(self.url, {
            'chat_id': str(self.chat.id), 'attachments': [png_upload()],
        }, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        attachments = response.data['data']['attachments']
        self.assertEqual(len(attachments), 1)
        self.assertEqual(attachments[0]['attachment_type'], 'image')
        self.assertTrue(attachments[0]['file_url'].startswith('http://testserver/media/chat_attachments/'))

    def test_empty_message_is_400(self):
        response = self.client.post(self.url, {'chat_id': str(self.chat.id), 'message': '   '}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Message must have content or at least one attachment.')
        self.assertEqual(Message.objects.count(), 0)

    def test_disallowed_file_type_is_400(self):
        upload = SimpleUploadedFile("setup.exe", b"MZ\x90\x00", "application/x-msdownload")
        response = self.client.post(self.url, {
            'chat_id': str(self.chat.id), 'attachments': [upload],
        }, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('not allowed', response.data['error'])
        self.assertEqual(Message.objects.count(), 0)

    def test_too_many_files_is_400(self):
        uploads = [png_upload(f"photo{i}.png") for i in range(6)]
        response = self.client.post(self.url, {
            'chat_id': str(self.chat.id), 'attachments': uploads,
        }, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    @override_settings(CHAT_ATTACHMENT_MAX_SIZE=10)
    def test_oversized_file_is_400(self):
        response = self.client.post(self.url, {
            'chat_id': str(self.chat.id), 'attachments': [png_upload()],
        }, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('too large', response.data['error'])

    def test_sending_as_someone_else_is_forbidden(self):
        response = self.client.post(self.url, {
            'chat_id': str(self.chat.id), 'sender_id': 'landlord1', 'message': 'Hi',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_outsider_cannot_send(self):
        self.authenticate("outsider")
        response = self.client.post(self.url, {'chat_id': str(self.chat.id), 'message': 'Hi'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class MarkReadViewTest(MessageAPITestCase):
    def test_mark_read(self):
        Message.objects.create(chat=self.chat, sender_id="landlord1", body="one")
        url = reverse('dmessages:mark-read', args=[self.chat.id])

        response = self.client.put(url, {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['marked_read'], 1)
        self.assertEqual(response.data['message'], 'Messages marked as read')

        response = self.client.put(url, {'user_id': 'renter1'}, format='json')
        self.assertEqual(response.data['marked_read'], 0)

    def test_mark_read_for_someone_else_is_forbidden(self):
        url = reverse('dmessages:mark-read', args=[self.chat.id])
        response = self.client.put(url, {'user_id': 'landlord1'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class UnreadCountViewTest(MessageAPITestCase):
    def test_unread_count(self):
        Message.objects.create(chat=self.chat, sender_id="landlord1", body="one")
        Message.objects.create(chat=self.chat, sender_id="renter1", body="mine")

        response = self.client.get(reverse('dmessages:unread-count', args=["renter1"]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'unread_count': 1})

    def test_other_users_count_is_forbidden(self):
        response = self.client.get(reverse('dmessages:unread-count', args=["landlord1"]))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
