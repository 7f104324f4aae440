class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class PersistenceError(DomainError):
    """Raised when the backing store cannot complete an operation."""


class SessionClosedError(DomainError):
    """Raised by the ledger when a write targets a session that is no longer active."""

    def __init__(self, session_token: str):
        super().__init__(f"Session {session_token} is not active")
        self.session_token = session_token
