from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .attendance.factory import AdmissionRuleFactory
from .attendance.ledger import AttendanceLedger
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AdmissionGate
from .core.constants import DEFAULT_EVENT_SERVICE_TIMEOUT, DEFAULT_TOKEN_BYTES
from .database.connection import DatabaseConnection, DBConfig
from .database.memory import InMemoryAttendanceRepository, InMemorySessionRepository, InMemoryStore
from .joining.event_client import EventJoinClient, HttpEventJoinClient
from .joining.memory_event_directory import InMemoryEventDirectory
from .joining.resolver import CodeResolver
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .sessions.service import SessionRegistry, generate_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    sessions_repo: SessionRepository
    attendance_repo: AttendanceRepository
    event_client: EventJoinClient

    ledger: AttendanceLedger
    session_registry: SessionRegistry
    admission_gate: AdmissionGate
    code_resolver: CodeResolver


def build_container(
    *,
    storage_backend: str = "mysql",
    db_config: Optional[dict] = None,
    event_service_url: Optional[str] = None,
    event_service_timeout: float = DEFAULT_EVENT_SERVICE_TIMEOUT,
    token_bytes: int = DEFAULT_TOKEN_BYTES,
    event_client: Optional[EventJoinClient] = None,
    rule_factory: Optional[AdmissionRuleFactory] = None,
) -> Container:
    backend = (storage_backend or "mysql").lower()
    if backend == "memory":
        store = InMemoryStore()
        sessions_repo: Any = InMemorySessionRepository(store)
        attendance_repo: Any = InMemoryAttendanceRepository(store)
    elif backend == "mysql":
        if not db_config:
            raise ValueError("DB_CONFIG is required for the mysql storage backend")
        conn = DatabaseConnection(DBConfig.from_dict(db_config))
        sessions_repo = MySQLSessionRepository(conn)
        attendance_repo = MySQLAttendanceRepository(conn)
    else:
        raise ValueError(f"Unknown STORAGE_BACKEND: {storage_backend!r}")

    if event_client is None:
        if event_service_url:
            event_client = HttpEventJoinClient(event_service_url, timeout=event_service_timeout)
        else:
            logger.warning("EVENT_SERVICE_URL not set; event codes resolve against an empty local directory")
            event_client = InMemoryEventDirectory()

    ledger = AttendanceLedger(attendance_repo)
    session_registry = SessionRegistry(
        sessions_repo,
        ledger,
        token_factory=lambda: generate_token(int(token_bytes)),
    )
    admission_gate = AdmissionGate(ledger, rule_factory=rule_factory or AdmissionRuleFactory())
    code_resolver = CodeResolver(event_client, session_registry, admission_gate)

    return Container(
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        event_client=event_client,
        ledger=ledger,
        session_registry=session_registry,
        admission_gate=admission_gate,
        code_resolver=code_resolver,
    )
