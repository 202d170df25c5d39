"""Domain errors for RSVP, check-in and guest store access.

Every error carries a stable code and a message that is safe to show to a
guest. Anything internal (guest ids, store response text) is kept on the
exception for logging only.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    UNKNOWN_TOKEN = "UNKNOWN_TOKEN"
    CONFLICT = "CONFLICT"
    ALREADY_RESPONDED = "ALREADY_RESPONDED"
    RSVP_CLOSED = "RSVP_CLOSED"
    TRANSIENT = "TRANSIENT"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str
    status_code: int = 400
    details: Optional[Any] = None
    internal: Optional[str] = field(default=None, repr=False)

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Raised when caller input is invalid. Never retried."""

    def __init__(self, message: str = "Please check the form and try again.", errors: Optional[list] = None) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=422,
            details=errors or None,
        )


class NotFoundError(DomainError):
    """Raised when a guest identifier does not resolve to a record."""

    def __init__(self, guest_id: str = "") -> None:
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message="We couldn't find this invitation. Please check your link.",
            status_code=404,
            internal=f"guest {guest_id!r} not found",
        )
        self.guest_id = guest_id


class UnknownTokenError(DomainError):
    """Raised when a scanned or typed token matches no guest."""

    def __init__(self, token: str = "") -> None:
        super().__init__(
            code=ErrorCode.UNKNOWN_TOKEN,
            message="Invalid code.",
            status_code=404,
            internal=f"token {token!r} matched no guest",
        )
        self.token = token


class ConflictError(DomainError):
    """Raised when the store reports an incompatible concurrent change."""

    def __init__(self, internal: Optional[str] = None) -> None:
        super().__init__(
            code=ErrorCode.CONFLICT,
            message="This invitation was changed in the meantime. Please refresh and try again.",
            status_code=409,
            internal=internal,
        )


class AlreadyRespondedError(DomainError):
    """Raised on a second public RSVP for the same guest."""

    def __init__(self, guest_id: str = "") -> None:
        super().__init__(
            code=ErrorCode.ALREADY_RESPONDED,
            message="Your RSVP has already been recorded.",
            status_code=409,
            internal=f"guest {guest_id!r} already responded",
        )
        self.guest_id = guest_id


class RsvpClosedError(DomainError):
    """Raised when RSVP submissions are switched off."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.RSVP_CLOSED,
            message="RSVP is currently closed.",
            status_code=403,
        )


class TransientError(DomainError):
    """Raised on network failures and store 5xx responses. Not retried."""

    def __init__(self, internal: Optional[str] = None) -> None:
        super().__init__(
            code=ErrorCode.TRANSIENT,
            message="Something went wrong. Please try again.",
            status_code=503,
            internal=internal,
        )
