"""
Board routes: the server-rendered queue page and its form submissions.
"""

import logging
from datetime import date
from typing import Any
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

from workqueue.api.operations import add_record, change_status, remove_record, report_rejection
from workqueue.config import get_settings
from workqueue.constants import BOARD_PATH, REJECTED_QUERY_PARAM, SPAN_RENDER_BOARD, SubmissionAction
from workqueue.db import get_async_session
from workqueue.db.repository import QueueRepository
from workqueue.exceptions import SubmissionRejected
from workqueue.observability.tracing import get_tracer
from workqueue.types.submissions import Rejection
from workqueue.validation import coerce_id, parse_action, parse_new_record, parse_status_change
from workqueue.view import build_board

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Board"])


def _get_templates(request: Request) -> Jinja2Templates:
    templates = getattr(request.app.state, "templates", None)
    if templates is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Templates not initialized",
        )
    return templates


def _parse_rejected(value: str | None) -> list[Rejection]:
    if not value:
        return []
    parsed = (Rejection.from_token(token) for token in value.split(","))
    return [r for r in parsed if r is not None]


def _redirect(rejections: list[Rejection] | None = None) -> RedirectResponse:
    url = BOARD_PATH
    if rejections:
        tokens = ",".join(r.to_token() for r in rejections)
        url = f"{BOARD_PATH}?{urlencode({REJECTED_QUERY_PARAM: tokens})}"
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


@router.get(
    BOARD_PATH,
    response_class=HTMLResponse,
    summary="Queue board",
    description="Render the queue with its stats, most urgent work first.",
)
async def show_board(
    request: Request,
    rejected: str | None = Query(default=None, alias=REJECTED_QUERY_PARAM),
    session: AsyncSession = Depends(get_async_session),
) -> HTMLResponse:
    """
    Render the board.

    Stats are computed from the same snapshot that is listed, so the
    numbers always match the rows shown.

    Args:
        request: The incoming request.
        rejected: Encoded rejections from the previous submission.
        session: Database session.

    Returns:
        The rendered page.
    """
    settings = get_settings()
    repo = QueueRepository(session)

    with get_tracer().start_as_current_span(SPAN_RENDER_BOARD) as span:
        records = await repo.list_records()
        view = build_board(
            records,
            today=date.today(),
            settings=settings,
            rejections=_parse_rejected(rejected),
        )
        span.set_attribute("record_count", len(records))

    return _get_templates(request).TemplateResponse(
        request,
        "board.html",
        {
            "view": view,
            "locale": settings.display_locale,
        },
    )


@router.post(
    BOARD_PATH,
    summary="Submit a board action",
    description="Add a record, change a status or delete a record, then redirect to the board.",
)
async def submit_board_action(
    request: Request,
    session: AsyncSession = Depends(get_async_session),
) -> RedirectResponse:
    """
    Handle a board form submission.

    The ``action`` field selects add, update_status or delete. The
    response is always a 303 back to the board so a refresh never
    resubmits. Rejected input is reported through the redirect URL;
    unknown ids are ignored.

    Args:
        request: The incoming request carrying the form.
        session: Database session.

    Returns:
        Redirect to the board.
    """
    form: dict[str, Any] = dict(await request.form())
    repo = QueueRepository(session)

    try:
        action = parse_action(form.get("action"))

        if action == SubmissionAction.ADD:
            await add_record(repo, parse_new_record(form), source="board")
        elif action == SubmissionAction.UPDATE_STATUS:
            await change_status(repo, parse_status_change(form))
        elif action == SubmissionAction.DELETE:
            await remove_record(repo, coerce_id(form.get("id")))
    except SubmissionRejected as e:
        report_rejection(e, source="board")
        return _redirect(e.rejections)

    await session.commit()

    return _redirect()
