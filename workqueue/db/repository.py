"""
Queue record repository for database operations.
Implements the data access patterns for the work queue.
"""

import logging
from collections.abc import Sequence
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from workqueue.constants import DEFAULT_STATUS, MAX_RECORD_ID, QueueStatus
from workqueue.db.models import QueueRecord

logger = logging.getLogger(__name__)


def _storable_id(record_id: int) -> bool:
    """Check if an id could exist at all; others would overflow the driver."""
    return 1 <= record_id <= MAX_RECORD_ID


class QueueRepository:
    """
    Repository for queue record database operations.

    Every operation is a single statement against the work_queue table:
    - Record creation
    - Ordered listing (deadline ascending, newest first on ties)
    - Status update
    - Permanent delete

    Input is expected to be validated by the caller; see workqueue.validation.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize the repository with a database session.

        Args:
            session: The async database session.
        """
        self._session = session

    async def add_record(
        self,
        customer_name: str,
        contact_handle: str,
        price: Decimal,
        description: str,
        deadline: date,
    ) -> QueueRecord:
        """
        Create a new pending queue record.

        Args:
            customer_name: Customer display name.
            contact_handle: Customer contact handle.
            price: Agreed price, already validated as positive.
            description: Free-text description of the work.
            deadline: Due date.

        Returns:
            The persisted QueueRecord with its assigned id.
        """
        record = QueueRecord(
            customer_name=customer_name,
            discord_id=contact_handle,
            price=price,
            description=description,
            deadline=deadline,
            status=DEFAULT_STATUS.value,
            created_at=datetime.now(timezone.utc),
        )
        self._session.add(record)
        await self._session.flush()

        logger.info(
            "Created queue record",
            extra={"record_id": record.id, "deadline": deadline.isoformat()},
        )
        return record

    async def get_record(self, record_id: int) -> QueueRecord | None:
        """
        Get a queue record by ID.

        Args:
            record_id: The record id.

        Returns:
            The QueueRecord or None if not found.
        """
        if not _storable_id(record_id):
            return None

        stmt = (
            select(QueueRecord)
            .where(QueueRecord.id == record_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_records(self) -> Sequence[QueueRecord]:
        """
        List every queue record, most urgent first.

        Ordered by deadline ascending; among equal deadlines the most
        recently added record comes first. Ids are monotonic, so they
        break created_at ties the same way.

        Returns:
            The ordered records.
        """
        stmt = select(QueueRecord).order_by(
            QueueRecord.deadline.asc(),
            QueueRecord.created_at.desc(),
            QueueRecord.id.desc(),
        )
        result = await self._session.execute(stmt)
        return result.scalars().all()

    async def update_status(self, record_id: int, status: QueueStatus) -> bool:
        """
        Set the status of a record. No other column is touched.

        Args:
            record_id: The record id.
            status: The new status.

        Returns:
            True if a record was updated, False if the id does not exist.
        """
        updated = False
        if _storable_id(record_id):
            stmt = (
                update(QueueRecord)
                .where(QueueRecord.id == record_id)
                .values(status=QueueStatus(status).value)
            )
            result = await self._session.execute(stmt)
            updated = result.rowcount > 0

        if updated:
            logger.info(
                "Updated queue record status",
                extra={"record_id": record_id, "status": str(status)},
            )
        else:
            logger.info(
                "Status update for unknown record ignored",
                extra={"record_id": record_id},
            )
        return updated

    async def delete_record(self, record_id: int) -> bool:
        """
        Permanently delete a record.

        Args:
            record_id: The record id.

        Returns:
            True if a record was deleted, False if the id does not exist.
        """
        if not _storable_id(record_id):
            return False

        stmt = delete(QueueRecord).where(QueueRecord.id == record_id)
        result = await self._session.execute(stmt)
        deleted = result.rowcount > 0

        if deleted:
            logger.info("Deleted queue record", extra={"record_id": record_id})
        return deleted
