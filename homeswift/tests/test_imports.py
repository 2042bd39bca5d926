import os
import subprocess
import sys

from django.conf import settings
from django.test import SimpleTestCase


class ImportOrderTest(SimpleTestCase):
    """Service modules must import cleanly in a fresh interpreter, before any DRF view."""

    def import_fresh(self, module):
        env = dict(os.environ, DJANGO_SETTINGS_MODULE="homeswift.settings")
        code = f"import django; django.setup(); import {module}"
        return subprocess.run(
            [sys.executable, "-c", code],
            cwd=str(settings.BASE_DIR),
            env=env,
            capture_output=True,
            text=True,
        )

    def test_exceptions_before_views(self):
        result = self.import_fresh("homeswift.exceptions")
        self.assertEqual(result.returncode, 0, result.stderr)

    def test_services_before_views(self):
        for module in ("listings.services", "conversations.services", "dmessages.storage"):
            with self.subTest(module=module):
                result = self.import_fresh(module)
                self.assertEqual(result.returncode, 0, result.stderr)
