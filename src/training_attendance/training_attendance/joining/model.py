from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Trainee:
    """Who is presenting a join code."""

    trainee_id: str
    name: Optional[str] = None
    phone: Optional[str] = None
    access_token: Optional[str] = field(default=None, repr=False)


@dataclass(frozen=True)
class EventJoinResult:
    """Answer of the Event-join collaborator for one code."""

    success: bool
    already_joined: bool = False
    event: Optional[Mapping[str, Any]] = None
    error: Optional[str] = None

    @classmethod
    def joined(cls, event: Mapping[str, Any]) -> "EventJoinResult":
        return cls(success=True, event=event)

    @classmethod
    def rejoined(cls, event: Mapping[str, Any]) -> "EventJoinResult":
        return cls(success=True, already_joined=True, event=event)

    @classmethod
    def failure(cls, error: str) -> "EventJoinResult":
        return cls(success=False, error=error)
