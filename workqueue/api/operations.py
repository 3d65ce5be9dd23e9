"""
Queue operations shared by the board and the JSON API.

Each wraps a single repository call with its trace span and metrics.
Validation has already happened by the time these run.
"""

import logging

from workqueue.constants import SPAN_ADD_RECORD, SPAN_DELETE_RECORD, SPAN_UPDATE_STATUS
from workqueue.db.models import QueueRecord
from workqueue.db.repository import QueueRepository
from workqueue.exceptions import SubmissionRejected
from workqueue.observability.metrics import get_metrics
from workqueue.observability.tracing import get_tracer
from workqueue.types.submissions import NewRecord, StatusChange

logger = logging.getLogger(__name__)


async def add_record(
    repo: QueueRepository,
    new_record: NewRecord,
    source: str,
) -> QueueRecord:
    """
    Store a validated record.

    Args:
        repo: Repository bound to the request session.
        new_record: Validated record values.
        source: Where the submission came from ("board" or "api").

    Returns:
        The stored record.
    """
    with get_tracer().start_as_current_span(SPAN_ADD_RECORD) as span:
        span.set_attribute("source", source)
        record = await repo.add_record(
            customer_name=new_record.customer_name,
            contact_handle=new_record.contact_handle,
            price=new_record.price,
            description=new_record.description,
            deadline=new_record.deadline,
        )
        span.set_attribute("record_id", record.id)

    get_metrics().record_created(source)
    return record


async def change_status(repo: QueueRepository, change: StatusChange) -> bool:
    """
    Apply a validated status change.

    Returns:
        True if the record existed and was updated.
    """
    with get_tracer().start_as_current_span(SPAN_UPDATE_STATUS) as span:
        span.set_attribute("record_id", change.record_id)
        span.set_attribute("status", str(change.status))
        updated = await repo.update_status(change.record_id, change.status)

    if updated:
        get_metrics().record_status_update(str(change.status))
    return updated


async def remove_record(repo: QueueRepository, record_id: int) -> bool:
    """
    Delete a record permanently.

    Returns:
        True if the record existed and was deleted.
    """
    with get_tracer().start_as_current_span(SPAN_DELETE_RECORD) as span:
        span.set_attribute("record_id", record_id)
        deleted = await repo.delete_record(record_id)

    if deleted:
        get_metrics().record_deleted()
    return deleted


def report_rejection(error: SubmissionRejected, source: str) -> None:
    """Log and count a rejected submission."""
    metrics = get_metrics()
    for rejection in error.rejections:
        metrics.record_rejection(rejection.field, str(rejection.reason))

    logger.info(
        "Submission rejected",
        extra={
            "source": source,
            "rejections": [r.to_token() for r in error.rejections],
        },
    )
