"""
Error taxonomy for Dungeon Fighter.

Every failure a command can run into is a FighterError. None of them is
fatal: the session controller answers validation and protocol problems with
usage text, the combat engine downgrades persistence failures to a status
message, and authentication failures travel up to the terminal which prints
them.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from dungeon_fighter.auth.results import AuthFailure


class ErrorSeverity(Enum):
    """Enumeration of error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class FighterError(Exception):
    """
    Base exception for all game errors.

    Args:
        message: Human-readable error message.
        details: Additional structured data about the error.

    """

    DEFAULT_SEVERITY: ErrorSeverity = ErrorSeverity.MEDIUM

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message: str = message
        self.details: dict[str, Any] = details or {}
        self.severity: ErrorSeverity = self.DEFAULT_SEVERITY
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "severity": self.severity.value,
        }


class ValidationError(FighterError):
    """A command is missing one of its required arguments."""

    DEFAULT_SEVERITY = ErrorSeverity.LOW


class ProtocolError(FighterError):
    """The input line does not match any known command."""

    DEFAULT_SEVERITY = ErrorSeverity.LOW


class RemoteError(FighterError):
    """
    A call to the auth gateway came back with a failure.

    Args:
        failure: The failure returned by the gateway.
        details: Additional structured data about the error.

    """

    def __init__(self, failure: AuthFailure, details: dict[str, Any] | None = None) -> None:
        self.failure: AuthFailure = failure
        super().__init__(failure.message, {"kind": str(failure.kind), "status": failure.status, **(details or {})})

    @property
    def is_transport(self) -> bool:
        """Whether the call failed before the capability could answer."""
        return self.failure.is_transport


class AuthError(RemoteError):
    """Register or login was refused, or could not reach the account store."""

    DEFAULT_SEVERITY = ErrorSeverity.MEDIUM


class PersistenceError(RemoteError):
    """Saving progress after a victory failed."""

    DEFAULT_SEVERITY = ErrorSeverity.LOW
