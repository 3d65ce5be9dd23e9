"""
SQLAlchemy database models.
Defines the work_queue table.
"""

from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    TypeDecorator,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from workqueue.constants import DEFAULT_STATUS


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware UTC timestamp.

    SQLite stores datetimes without an offset; values are normalized to UTC
    on the way in and tagged as UTC on the way out, so every backend returns
    aware datetimes.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class QueueRecord(Base):
    """
    A tracked job/commission in the work queue.

    This is the only entity. After creation the status column is the only
    one ever written; created_at and id are immutable.

    Key constraints:
    - price is strictly positive
    - status is plain text so rows written by older tools still load;
      the request boundary only ever writes one of the four QueueStatus values
    """

    __tablename__ = "work_queue"

    # Primary key
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    # Customer
    customer_name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    discord_id: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # Work
    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    deadline: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )

    # Lifecycle
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=DEFAULT_STATUS.value,
        server_default=DEFAULT_STATUS.value,
    )

    # Set in Python so same-second inserts still order correctly
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
    )

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_work_queue_price_positive"),
        # Index for the board ordering
        Index("ix_work_queue_deadline_created", "deadline", "created_at"),
    )

    @property
    def contact_handle(self) -> str:
        """The customer's contact handle (stored as discord_id)."""
        return self.discord_id

    def __repr__(self) -> str:
        return (
            f"QueueRecord(id={self.id}, customer={self.customer_name!r}, "
            f"status={self.status}, deadline={self.deadline})"
        )
