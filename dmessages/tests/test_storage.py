import os
import shutil
from unittest.mock import patch

from django.test import SimpleTestCase, override_settings

from dmessages import storage
from homeswift.exceptions import DependencyFailure, Unavailable
from utils.uploads import attachment_storage_key, attachment_type_for

from .helpers import PNG_BYTES, TEST_MEDIA_DIR


@override_settings(MEDIA_ROOT=TEST_MEDIA_DIR)
class StorageUploadTest(SimpleTestCase):
    def tearDown(self):
        if os.path.exists(TEST_MEDIA_DIR):
            shutil.rmtree(TEST_MEDIA_DIR)

    def test_upload_returns_key_and_public_url(self):
        key, url = storage.upload("chat_attachments/chat1/1_abc.png", PNG_BYTES, "image/png")

        self.assertEqual(key, "chat_attachments/chat1/1_abc.png")
        self.assertEqual(url, "/media/chat_attachments/chat1/1_abc.png")
        with open(os.path.join(TEST_MEDIA_DIR, key), "rb") as f:
            self.assertEqual(f.read(), PNG_BYTES)

    def test_backend_error_is_dependency_failure(self):
        with patch('dmessages.storage._save', side_effect=OSError("disk full")):
            with self.assertRaises(DependencyFailure):
                storage.upload("chat_attachments/chat1/x.png", PNG_BYTES, "image/png")

    @override_settings(BLOB_STORAGE_TIMEOUT_SECONDS=0.01)
    def test_slow_backend_is_unavailable(self):
        import threading
        release = threading.Event()

        def slow_save(key, data, content_type):
            release.wait(1)
            return key

        with patch('dmessages.storage._save', side_effect=slow_save):
            with self.assertRaises(Unavailable):
                storage.upload("chat_attachments/chat1/x.png", PNG_BYTES, "image/png")
        release.set()


class StorageKeyTest(SimpleTestCase):
    def test_key_layout(self):
        key = attachment_storage_key("chat1", "Lease Agreement.PDF")
        self.assertTrue(key.startswith("chat_attachments/chat1/"))
        self.assertTrue(key.endswith(".pdf"))

    def test_keys_do_not_collide(self):
        keys = {attachment_storage_key("chat1", "photo.png") for _ in range(50)}
        self.assertEqual(len(keys), 50)

    def test_key_without_extension(self):
        self.assertNotIn(".", os.path.basename(attachment_storage_key("chat1", "README")))

    def test_attachment_type_for(self):
        self.assertEqual(attachment_type_for("image/png"), "image")
        self.assertEqual(attachment_type_for("video/mp4"), "video")
        self.assertEqual(attachment_type_for("audio/mpeg"), "audio")
        self.assertEqual(attachment_type_for("application/pdf"), "file")
        self.assertEqual(attachment_type_for(None), "file")
