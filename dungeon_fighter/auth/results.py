"""
Result types for the auth gateway.

Gateway calls never raise for expected outcomes: they return an AuthResult
holding either the account or a failure. Callers branch on ``result.ok``,
which keeps "propagate to the user" and "recover locally" as explicit code
paths instead of exception unwinding.
"""

from typing import Protocol

from pydantic import BaseModel, Field

from dungeon_fighter.core.constants import NiceEnum

EMPTY_REPLY_MESSAGE = "Empty response from the account service."


class FailureKind(NiceEnum):
    """Why a gateway call did not succeed."""

    # The capability answered and refused the request.
    REJECTED = "REJECTED"
    # The request never got a proper answer (store down, I/O error, bad reply).
    TRANSPORT = "TRANSPORT"


class AccountInfo(BaseModel):
    """The public part of an account."""

    username: str = Field(description="Unique account name.")
    level: int = Field(ge=1, description="Saved player level.")


class AuthFailure(BaseModel):
    """A failed gateway call."""

    message: str = Field(description="Human-readable reason.")
    kind: FailureKind = Field(
        default=FailureKind.REJECTED,
        description="Rejected by the capability or failed in transport.",
    )
    status: int = Field(
        default=400,
        description="HTTP-style status classification.",
    )

    @property
    def is_transport(self) -> bool:
        return self.kind == FailureKind.TRANSPORT

    def __str__(self) -> str:
        return f"{self.message} ({self.kind}, {self.status})"


class AuthResult(BaseModel):
    """Either a successful account payload or a failure."""

    user: AccountInfo | None = Field(default=None)
    failure: AuthFailure | None = Field(default=None)

    @property
    def ok(self) -> bool:
        return self.failure is None and self.user is not None

    def reason(self) -> AuthFailure:
        """
        Why the call did not succeed.

        A reply carrying neither an account nor a failure is malformed and
        counts as a 502 transport failure.
        """
        if self.failure is not None:
            return self.failure
        return AuthFailure(message=EMPTY_REPLY_MESSAGE, kind=FailureKind.TRANSPORT, status=502)

    @classmethod
    def success(cls, username: str, level: int) -> "AuthResult":
        return cls(user=AccountInfo(username=username, level=level))

    @classmethod
    def rejected(cls, message: str, status: int = 400) -> "AuthResult":
        return cls(failure=AuthFailure(message=message, kind=FailureKind.REJECTED, status=status))

    @classmethod
    def transport_error(cls, message: str, status: int = 500) -> "AuthResult":
        return cls(failure=AuthFailure(message=message, kind=FailureKind.TRANSPORT, status=status))


class AuthGateway(Protocol):
    """The account capability consumed by the game."""

    async def register(self, username: str, password: str) -> AuthResult:
        """Creates an account at level 1 and logs it in."""
        ...

    async def login(self, username: str, password: str) -> AuthResult:
        """Checks credentials and returns the saved level."""
        ...

    async def update_level(self, username: str, level: int) -> AuthResult:
        """Stores a new level for an existing account."""
        ...
