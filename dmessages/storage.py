"""
Blob storage for chat attachments.

Wraps Django's configured storage backend (local files by default, any
``django.core.files.storage`` backend in production). Uploads run on a small
thread pool and the request stops waiting after
``BLOB_STORAGE_TIMEOUT_SECONDS``. A write that has already started cannot
be interrupted: it keeps running in its worker thread and may still land in
storage after the timeout has been reported.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage

from homeswift.exceptions import DependencyFailure, Unavailable

logger = logging.getLogger(__name__)

_executor = None


def _get_executor():
    global _executor
    if _executor is None:
        _executor = ThreadPoolExecutor(
            max_workers=getattr(settings, 'BLOB_UPLOAD_WORKERS', 4),
            thread_name_prefix='attachment-upload',
        )
    return _executor


def _save(key, data, content_type):
    content = ContentFile(data, name=key)
    content.content_type = content_type
    return default_storage.save(key, content)


def get_public_url(key):
    return default_storage.url(key)


def upload(key, data, content_type):
    """
    Store ``data`` under ``key`` and return ``(saved_key, public_url)``.

    Raises ``Unavailable`` when the backend does not answer in time and
    ``DependencyFailure`` when it fails.
    """
    timeout = getattr(settings, 'BLOB_STORAGE_TIMEOUT_SECONDS', 30)
    future = _get_executor().submit(_save, key, data, content_type)
    try:
        saved_key = future.result(timeout=timeout)
    except FuturesTimeoutError:
        # Only stops an upload that is still queued.
        future.cancel()
        raise Unavailable(f"Upload of {key} timed out after {timeout}s")
    except OSError as e:
        raise DependencyFailure(f"Upload of {key} failed: {e}")
    return saved_key, get_public_url(saved_key)


def delete(key):
    """Remove a stored blob; a missing key is not an error."""
    default_storage.delete(key)
