from __future__ import annotations

import logging
from typing import Optional, Sequence

from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceLedger:
    """Append-only attendance store: one record per (session, trainee), never edited."""

    def __init__(self, records: AttendanceRepository):
        self._records = records

    def upsert(self, record: AttendanceRecord) -> AttendanceRecord:
        """Insert ``record`` or return the one already stored for its key.

        The stored record is returned untouched on a repeat, so every caller sees
        the same marked_at. Raises SessionClosedError when the session stopped
        accepting records before this write.
        """
        stored, created = self._records.insert_if_absent(record)
        if created:
            logger.info("Attendance recorded session=%s trainee=%s", stored.session_token, stored.trainee_id)
        else:
            logger.debug("Attendance already recorded session=%s trainee=%s", stored.session_token, stored.trainee_id)
        return stored

    def get(self, session_token: str, trainee_id: str) -> Optional[AttendanceRecord]:
        return self._records.get(session_token, trainee_id)

    def count_for(self, session_token: str) -> int:
        return self._records.count_for(session_token)

    def list_for(self, session_token: str) -> Sequence[AttendanceRecord]:
        return list(self._records.list_for(session_token))
