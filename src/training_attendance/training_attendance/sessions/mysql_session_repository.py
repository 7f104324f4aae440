from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..common.geo import GeoPoint
from ..core.enums import AdmissionMode, SessionState
from ..core.exceptions import PersistenceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_time, to_db_time
from .model import Session
from .repository import SessionRepository

_COLUMNS = """
    session_token, training_ref, mode, radius_m, anchor_lat, anchor_lon, state,
    started_at, ended_at, trainer_id, hotspot_ssid, trainer_device, trainer_ip
"""


def _row_to_session(r: dict) -> Session:
    anchor = None
    if r.get("anchor_lat") is not None and r.get("anchor_lon") is not None:
        anchor = GeoPoint(lat=float(r["anchor_lat"]), lon=float(r["anchor_lon"]))
    return Session(
        token=r["session_token"],
        training_ref=r["training_ref"],
        mode=AdmissionMode(r["mode"]),
        radius_meters=int(r["radius_m"]) if r.get("radius_m") is not None else None,
        anchor=anchor,
        state=SessionState(r["state"]),
        started_at=from_db_time(r["started_at"]),
        ended_at=from_db_time(r.get("ended_at")),
        trainer_id=r.get("trainer_id"),
        hotspot_ssid=r.get("hotspot_ssid"),
        trainer_device=r.get("trainer_device"),
        trainer_ip=r.get("trainer_ip"),
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(self, session: Session) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    INSERT INTO attendance_sessions({_COLUMNS})
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        session.token,
                        session.training_ref,
                        session.mode.value,
                        session.radius_meters,
                        session.anchor.lat if session.anchor else None,
                        session.anchor.lon if session.anchor else None,
                        session.state.value,
                        to_db_time(session.started_at),
                        to_db_time(session.ended_at),
                        session.trainer_id,
                        session.hotspot_ssid,
                        session.trainer_device,
                        session.trainer_ip,
                    ),
                )
                return True
        except PersistenceError as exc:
            cause = exc.__cause__
            if isinstance(cause, mysql.connector.Error) and cause.errno == errorcode.ER_DUP_ENTRY:
                return False
            raise

    def get(self, token: str) -> Optional[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_sessions WHERE session_token=%s",
                (token,),
            )
            r = fetchone(cur)
            return _row_to_session(r) if r else None

    def mark_ended(self, token: str, ended_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_sessions
                SET state='ended', ended_at=%s
                WHERE session_token=%s AND state='active'
                """,
                (to_db_time(ended_at), token),
            )
            return cur.rowcount > 0

    def list_active_for_trainer(self, trainer_id: str) -> Sequence[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_sessions
                WHERE trainer_id=%s AND state='active'
                ORDER BY started_at DESC
                """,
                (trainer_id,),
            )
            return [_row_to_session(r) for r in fetchall(cur)]

    def list_for_training(self, training_ref: str) -> Sequence[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_sessions
                WHERE training_ref=%s
                ORDER BY started_at DESC
                """,
                (training_ref,),
            )
            return [_row_to_session(r) for r in fetchall(cur)]
