"""
Best-effort side effects.

Secondary reads and writes (summary lookups, join-table bookkeeping,
attachment uploads, context fetches) must not fail the operation they
accompany. Each one runs through ``BestEffort.run``; a failure is logged and
kept as a warning the caller can return to the client.
"""

import logging

from django.db import transaction

logger = logging.getLogger(__name__)


class BestEffort:
    def __init__(self, log=None):
        self.log = log or logger
        self.warnings = []

    def run(self, task, func, *args, default=None, atomic=True, **kwargs):
        """
        Call ``func`` and return its result, or ``default`` if it raised.

        With ``atomic`` the call runs inside a savepoint so a failed statement
        does not poison the surrounding transaction.
        """
        try:
            if atomic:
                with transaction.atomic():
                    return func(*args, **kwargs)
            return func(*args, **kwargs)
        except Exception as exc:
            self.log.warning("Best-effort task failed (%s): %s", task, exc, exc_info=True)
            self.warnings.append({'task': task, 'error': str(exc)})
            return default
