from __future__ import annotations

from typing import Optional, Sequence

from ..common.geo import GeoPoint
from ..core.enums import AdmissionMode
from ..core.exceptions import SessionClosedError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_time, from_json, to_db_time, to_json
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    record_id, session_token, trainee_id, trainee_name, trainee_phone, method,
    device_meta, location_lat, location_lon, distance_m, marked_at
"""


def _row_to_record(r: dict) -> AttendanceRecord:
    location = None
    if r.get("location_lat") is not None and r.get("location_lon") is not None:
        location = GeoPoint(lat=float(r["location_lat"]), lon=float(r["location_lon"]))
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        session_token=r["session_token"],
        trainee_id=r["trainee_id"],
        trainee_name=r.get("trainee_name"),
        trainee_phone=r.get("trainee_phone"),
        method=AdmissionMode(r["method"]),
        device_meta=from_json(r.get("device_meta")),
        location=location,
        distance_meters=float(r["distance_m"]) if r.get("distance_m") is not None else None,
        marked_at=from_db_time(r["marked_at"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert_if_absent(self, record: AttendanceRecord) -> tuple[AttendanceRecord, bool]:
        with db_cursor(self._conn_factory) as (_, cur):
            # One statement: the session row's lock orders this insert against
            # mark_ended, and the unique key orders it against concurrent inserts.
            cur.execute(
                """
                INSERT INTO attendance_records(
                    session_token, trainee_id, trainee_name, trainee_phone, method,
                    device_meta, location_lat, location_lon, distance_m, marked_at
                )
                SELECT %s,%s,%s,%s,%s,%s,%s,%s,%s,%s
                FROM attendance_sessions
                WHERE session_token=%s AND state='active'
                ON DUPLICATE KEY UPDATE record_id=record_id
                """,
                (
                    record.session_token,
                    record.trainee_id,
                    record.trainee_name,
                    record.trainee_phone,
                    record.method.value,
                    to_json(record.device_meta),
                    record.location.lat if record.location else None,
                    record.location.lon if record.location else None,
                    record.distance_meters,
                    to_db_time(record.marked_at),
                    record.session_token,
                ),
            )
            # rowcount: 1 inserted, 0 duplicate (no-op update) or session not active.
            created = cur.rowcount == 1

            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE session_token=%s AND trainee_id=%s",
                (record.session_token, record.trainee_id),
            )
            r = fetchone(cur)
            if not r:
                raise SessionClosedError(record.session_token)
            return _row_to_record(r), created

    def get(self, session_token: str, trainee_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE session_token=%s AND trainee_id=%s",
                (session_token, trainee_id),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def count_for(self, session_token: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS total FROM attendance_records WHERE session_token=%s",
                (session_token,),
            )
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def list_for(self, session_token: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_records
                WHERE session_token=%s
                ORDER BY marked_at ASC, record_id ASC
                """,
                (session_token,),
            )
            return [_row_to_record(r) for r in fetchall(cur)]
