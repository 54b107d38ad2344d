from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

GENERIC_FAILURE_MESSAGE = "The requested operation failed, please try again."
MALFORMED_REQUEST_MESSAGE = "Your request was malformed, please modify it and try again."
NOT_FOUND_MESSAGE = "The requested ID doesn't exist, please try again!"
NO_ID_MESSAGE = "No ID was provided, try again!"
ID_MISMATCH_MESSAGE = "The provided ID and the record's current ID do not match, try again!"
INVALID_KEY_MESSAGE = "Invalid key"
ADMIN_DISABLED_MESSAGE = "The admin interface is currently disabled"
NOT_FOUND_ROUTE_MESSAGE = "Not Found"


class ErrorKind(str, Enum):
    CLIENT = "client"
    AUTH = "auth"
    SERVER = "server"

    @property
    def status_code(self) -> int:
        if self is ErrorKind.CLIENT:
            return 400
        if self is ErrorKind.AUTH:
            return 403
        return 500


@dataclass(frozen=True)
class Outcome:
    """Status code plus a human readable message; one per request."""

    status: int
    message: str = ""

    @classmethod
    def created(cls, message: str) -> "Outcome":
        return cls(201, message)

    @classmethod
    def success(cls, message: str) -> "Outcome":
        return cls(200, message)

    @classmethod
    def no_content(cls) -> "Outcome":
        return cls(204, "")

    @classmethod
    def error(cls, kind: ErrorKind, message: str = "") -> "Outcome":
        # server failures never carry their underlying detail
        if kind is ErrorKind.SERVER:
            return cls(kind.status_code, GENERIC_FAILURE_MESSAGE)
        return cls(kind.status_code, message)

    @classmethod
    def failed(cls) -> "Outcome":
        return cls.error(ErrorKind.SERVER)


class AdminAccessDenied(Exception):
    """Raised by the admin gate; carries the 403 outcome to return."""

    def __init__(self, outcome: Outcome) -> None:
        super().__init__(outcome.message)
        self.outcome = outcome
