# squad_core/outcomes.py
"""
Result types returned across the session's public surface.

Expected conditions (an occupied slot, a stale swap, bad user input, a failed
generator call) come back as an `Outcome`. Exceptions are reserved for
programming-contract violations (`EngineNotReady`) and for collaborators
reporting failure to the session (`PersistenceError`, `GeneratorError`).
"""
from __future__ import annotations
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel


class Rejection(str, Enum):
    SLOT_OCCUPIED = "SlotOccupied"
    STALE_PLAYER_REFERENCE = "StalePlayerReference"
    PLAYER_NOT_FOUND = "PlayerNotFound"
    TEAM_NOT_FOUND = "TeamNotFound"
    SLOT_OUT_OF_RANGE = "SlotOutOfRange"
    INCOMPLETE_SELECTION = "IncompleteSelection"
    INVALID_INPUT = "InvalidInput"
    GENERATOR_FAILED = "GeneratorFailed"
    LOAD_FAILED = "LoadFailed"


class Outcome(BaseModel):
    status: Literal["ok", "noop", "conflict", "failure"]
    reason: Optional[Rejection] = None
    message: str = ""
    value: Any = None

    @property
    def ok(self) -> bool:
        """True when state is consistent with the request (changed or already so)."""
        return self.status in ("ok", "noop")

    @classmethod
    def success(cls, message: str = "", value: Any = None) -> "Outcome":
        return cls(status="ok", message=message, value=value)

    @classmethod
    def noop(cls, message: str = "") -> "Outcome":
        return cls(status="noop", message=message)

    @classmethod
    def conflict(cls, reason: Rejection, message: str) -> "Outcome":
        return cls(status="conflict", reason=reason, message=message)

    @classmethod
    def failure(cls, reason: Rejection, message: str) -> "Outcome":
        return cls(status="failure", reason=reason, message=message)


class EngineNotReady(RuntimeError):
    """Raised when an intent is issued before the session finished loading."""


class PersistenceError(RuntimeError):
    pass


class GeneratorError(RuntimeError):
    pass
