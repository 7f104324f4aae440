from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Session


class SessionRepository(Protocol):
    def add(self, session: Session) -> bool:
        """Insert if the token is unused. Returns False on a token collision."""

        raise NotImplementedError

    def get(self, token: str) -> Optional[Session]:
        raise NotImplementedError

    def mark_ended(self, token: str, ended_at: datetime) -> bool:
        """Atomically move an ACTIVE session to ENDED. False if it was not active."""

        raise NotImplementedError

    def list_active_for_trainer(self, trainer_id: str) -> Sequence[Session]:
        raise NotImplementedError

    def list_for_training(self, training_ref: str) -> Sequence[Session]:
        raise NotImplementedError
