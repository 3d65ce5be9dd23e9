"""
Board view type definitions.
Plain values computed from a record snapshot, ready for the template.
"""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class QueueStats:
    """Aggregates shown at the top of the board."""

    total: int = 0
    pending: int = 0
    in_progress: int = 0
    completed: int = 0
    revenue: Decimal = Decimal("0.00")


@dataclass(frozen=True)
class StatusBadge:
    """Label and color for a status value."""

    label: str
    color: str
    known: bool = True


@dataclass(frozen=True)
class RecordView:
    """One record as displayed on the board."""

    id: int
    customer_name: str
    contact_handle: str
    price: str
    deadline: str
    urgent: bool
    status: str
    badge: StatusBadge
    description_lines: list[str]
    created_at: str


@dataclass(frozen=True)
class BoardText:
    """Fixed page wording in the display locale."""

    title: str
    total: str
    pending: str
    in_progress: str
    completed: str
    revenue: str
    add_heading: str
    add_button: str
    queue_heading: str
    empty: str
    customer_name: str
    discord_id: str
    price: str
    deadline: str
    description: str
    status: str
    update_button: str
    delete_button: str
    delete_confirm: str
    urgent: str
    added: str


@dataclass
class BoardView:
    """
    Everything the board page renders.

    Built fresh for every request from the current record list.
    """

    stats: QueueStats
    revenue_display: str
    text: BoardText
    records: list[RecordView] = field(default_factory=list)
    status_options: list[tuple[str, str]] = field(default_factory=list)
    rejection_messages: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Check if there are no records to show."""
        return not self.records
