from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def insert_if_absent(self, record: AttendanceRecord) -> tuple[AttendanceRecord, bool]:
        """Store ``record`` unless (session_token, trainee_id) already exists.

        Returns the stored record and whether it was created by this call. The
        check for an existing row, the check that the session is still active
        and the insert happen as one atomic step; raises SessionClosedError when
        the session is no longer active and no record exists.
        """

        raise NotImplementedError

    def get(self, session_token: str, trainee_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def count_for(self, session_token: str) -> int:
        raise NotImplementedError

    def list_for(self, session_token: str) -> Sequence[AttendanceRecord]:
        """Records of one session ordered by marked_at, then insertion order."""

        raise NotImplementedError
