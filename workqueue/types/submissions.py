"""
Validated submission type definitions.
Produced by the request boundary, consumed by the repository.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from workqueue.constants import QueueStatus, RejectionReason


@dataclass(frozen=True)
class Rejection:
    """A single reason a submission was refused."""

    field: str
    reason: RejectionReason

    def to_token(self) -> str:
        """Encode as ``field:reason`` for redirect query strings."""
        return f"{self.field}:{self.reason}"

    @classmethod
    def from_token(cls, token: str) -> "Rejection | None":
        """Decode a ``field:reason`` token; returns None if malformed."""
        field, sep, reason = token.partition(":")
        if not sep or not field:
            return None
        try:
            return cls(field=field, reason=RejectionReason(reason))
        except ValueError:
            return None


@dataclass(frozen=True)
class NewRecord:
    """
    A queue record ready to be stored.
    All text fields are trimmed and non-empty, and price is positive.
    """

    customer_name: str
    contact_handle: str
    price: Decimal
    description: str
    deadline: date


@dataclass(frozen=True)
class StatusChange:
    """A validated request to move a record to a new status."""

    record_id: int
    status: QueueStatus
