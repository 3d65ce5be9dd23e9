"""
Queue record JSON routes.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from workqueue.api.operations import add_record, change_status, remove_record, report_rejection
from workqueue.constants import API_V1_PREFIX
from workqueue.db import get_async_session
from workqueue.db.models import QueueRecord
from workqueue.db.repository import QueueRepository
from workqueue.exceptions import SubmissionRejected
from workqueue.types.api import (
    CreateRecordRequest,
    QueueListResponse,
    QueueRecordResponse,
    QueueStatsResponse,
    RejectionResponse,
    UpdateStatusRequest,
    ValidationErrorResponse,
)
from workqueue.types.submissions import StatusChange
from workqueue.types.view import QueueStats
from workqueue.validation import parse_new_record, parse_status
from workqueue.view import compute_stats

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{API_V1_PREFIX}/queue", tags=["Queue"])


def _record_to_response(record: QueueRecord) -> QueueRecordResponse:
    """Convert a QueueRecord model to a QueueRecordResponse."""
    return QueueRecordResponse.model_validate(record)


def _stats_to_response(stats: QueueStats) -> QueueStatsResponse:
    return QueueStatsResponse(
        total=stats.total,
        pending=stats.pending,
        in_progress=stats.in_progress,
        completed=stats.completed,
        revenue=stats.revenue,
    )


def _rejected_response(error: SubmissionRejected) -> JSONResponse:
    body = ValidationErrorResponse(
        rejections=[
            RejectionResponse(field=r.field, reason=str(r.reason))
            for r in error.rejections
        ]
    )
    return JSONResponse(
        status_code=422,
        content=body.model_dump(),
    )


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Queue record not found",
    )


@router.get(
    "",
    response_model=QueueListResponse,
    summary="List queue records",
    description="List every record, most urgent first, with queue aggregates.",
)
async def list_records(
    session: AsyncSession = Depends(get_async_session),
) -> QueueListResponse:
    """
    List all queue records.

    Args:
        session: Database session.

    Returns:
        QueueListResponse with ordered records and stats from the same snapshot.
    """
    repo = QueueRepository(session)
    records = await repo.list_records()

    return QueueListResponse(
        records=[_record_to_response(r) for r in records],
        stats=_stats_to_response(compute_stats(records)),
    )


@router.post(
    "",
    response_model=QueueRecordResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a queue record",
    description="Add a new pending record. Rejected input returns 422 with every reason found.",
    responses={422: {"model": ValidationErrorResponse}},
)
async def create_record(
    request: CreateRecordRequest,
    session: AsyncSession = Depends(get_async_session),
):
    """
    Create a queue record.

    Args:
        request: Record fields, validated like the board form.
        session: Database session.

    Returns:
        The created record, or a 422 validation error.
    """
    try:
        new_record = parse_new_record(request.model_dump())
    except SubmissionRejected as e:
        report_rejection(e, source="api")
        return _rejected_response(e)

    repo = QueueRepository(session)
    record = await add_record(repo, new_record, source="api")
    await session.commit()

    return _record_to_response(record)


@router.get(
    "/stats/summary",
    response_model=QueueStatsResponse,
    summary="Get queue statistics",
    description="Counts per status and revenue from completed records.",
)
async def get_stats(
    session: AsyncSession = Depends(get_async_session),
) -> QueueStatsResponse:
    """
    Get queue statistics.

    Args:
        session: Database session.

    Returns:
        QueueStatsResponse computed from the current records.
    """
    repo = QueueRepository(session)
    records = await repo.list_records()
    return _stats_to_response(compute_stats(records))


@router.get(
    "/{record_id}",
    response_model=QueueRecordResponse,
    summary="Get a queue record",
)
async def get_record(
    record_id: int,
    session: AsyncSession = Depends(get_async_session),
) -> QueueRecordResponse:
    """
    Get a queue record by ID.

    Raises:
        HTTPException: If the record does not exist.
    """
    repo = QueueRepository(session)
    record = await repo.get_record(record_id)

    if record is None:
        raise _not_found()

    return _record_to_response(record)


@router.patch(
    "/{record_id}/status",
    response_model=QueueRecordResponse,
    summary="Change a record's status",
    description="Status must be one of pending, in_progress, completed, cancelled.",
    responses={422: {"model": ValidationErrorResponse}},
)
async def update_status(
    record_id: int,
    request: UpdateStatusRequest,
    session: AsyncSession = Depends(get_async_session),
):
    """
    Update a record's status.

    Args:
        record_id: The record id.
        request: The new status.
        session: Database session.

    Returns:
        The updated record, or a 422 validation error.

    Raises:
        HTTPException: If the record does not exist.
    """
    try:
        new_status = parse_status(request.status)
    except SubmissionRejected as e:
        report_rejection(e, source="api")
        return _rejected_response(e)

    repo = QueueRepository(session)
    updated = await change_status(repo, StatusChange(record_id, new_status))

    if not updated:
        raise _not_found()

    await session.commit()

    record = await repo.get_record(record_id)
    if record is None:
        raise _not_found()

    return _record_to_response(record)


@router.delete(
    "/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a queue record",
    description="Permanently delete a record.",
)
async def delete_record(
    record_id: int,
    session: AsyncSession = Depends(get_async_session),
) -> Response:
    """
    Delete a queue record.

    Raises:
        HTTPException: If the record does not exist.
    """
    repo = QueueRepository(session)
    deleted = await remove_record(repo, record_id)

    if not deleted:
        raise _not_found()

    await session.commit()

    return Response(status_code=status.HTTP_204_NO_CONTENT)
