"""
Board view computation.

Pure functions over a freshly fetched record snapshot. Nothing here touches
the database or keeps state between requests.
"""

from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Protocol

from workqueue.config import Settings
from workqueue.constants import (
    CREATED_AT_FORMAT,
    DEADLINE_FORMAT,
    DEFAULT_LOCALE,
    DEFAULT_URGENT_WINDOW_DAYS,
    STATUS_COLORS,
    STATUS_LABELS,
    UNKNOWN_STATUS_COLOR,
    UNKNOWN_STATUS_KEY,
    QueueStatus,
    RejectionReason,
)
from workqueue.types.submissions import Rejection
from workqueue.types.view import BoardText, BoardView, QueueStats, RecordView, StatusBadge


class RecordLike(Protocol):
    """Anything shaped like a stored queue record."""

    id: int
    customer_name: str
    discord_id: str
    price: Decimal
    description: str
    deadline: date
    status: str
    created_at: datetime


FIELD_LABELS: dict[str, dict[str, str]] = {
    "en": {
        "customer_name": "Customer name",
        "discord_id": "Discord ID",
        "price": "Price",
        "description": "Description",
        "deadline": "Deadline",
        "status": "Status",
        "action": "Action",
    },
    "th": {
        "customer_name": "ชื่อลูกค้า",
        "discord_id": "Discord ID",
        "price": "ราคา",
        "description": "รายละเอียดงาน",
        "deadline": "วันกำหนดส่ง",
        "status": "สถานะ",
        "action": "คำสั่ง",
    },
}

REJECTION_MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        RejectionReason.REQUIRED: "{field} is required",
        RejectionReason.NOT_POSITIVE: "{field} must be greater than zero",
        RejectionReason.TOO_LARGE: "{field} is too large",
        RejectionReason.INVALID_DATE: "{field} must be a valid date",
        RejectionReason.INVALID_STATUS: "{field} is not a known status",
        RejectionReason.UNKNOWN_ACTION: "{field} is not supported",
    },
    "th": {
        RejectionReason.REQUIRED: "กรุณากรอก{field}",
        RejectionReason.NOT_POSITIVE: "{field}ต้องมากกว่าศูนย์",
        RejectionReason.TOO_LARGE: "{field}สูงเกินไป",
        RejectionReason.INVALID_DATE: "{field}ไม่ถูกต้อง",
        RejectionReason.INVALID_STATUS: "{field}ไม่ถูกต้อง",
        RejectionReason.UNKNOWN_ACTION: "{field}ไม่รองรับ",
    },
}


PAGE_TEXT: dict[str, dict[str, str]] = {
    "en": {
        "title": "Work Queue",
        "total": "Total",
        "pending": "Pending",
        "in_progress": "In progress",
        "completed": "Completed",
        "revenue": "Revenue",
        "add_heading": "Add work",
        "add_button": "Add",
        "queue_heading": "Queue",
        "empty": "No work queued yet",
        "update_button": "Update",
        "delete_button": "Delete",
        "delete_confirm": "Delete this job?",
        "urgent": "(urgent!)",
        "added": "Added",
    },
    "th": {
        "title": "ระบบจดบันทึกคิวงาน",
        "total": "คิวทั้งหมด",
        "pending": "รอดำเนินการ",
        "in_progress": "กำลังทำ",
        "completed": "เสร็จแล้ว",
        "revenue": "รายได้รวม",
        "add_heading": "เพิ่มคิวงานใหม่",
        "add_button": "เพิ่มคิวงาน",
        "queue_heading": "รายการคิวงาน",
        "empty": "ยังไม่มีคิวงาน",
        "update_button": "บันทึก",
        "delete_button": "ลบ",
        "delete_confirm": "คุณแน่ใจหรือไม่ที่จะลบคิวนี้?",
        "urgent": "(เร่งด่วน!)",
        "added": "เพิ่มเมื่อ",
    },
}


def _locale(locale: str) -> str:
    return locale if locale in STATUS_LABELS else DEFAULT_LOCALE


def compute_stats(records: Iterable[RecordLike]) -> QueueStats:
    """
    Compute board aggregates.

    Revenue sums completed records only. Cancelled records count toward
    the total but have no bucket of their own.

    Args:
        records: The current record snapshot.

    Returns:
        QueueStats for the snapshot.
    """
    total = pending = in_progress = completed = 0
    revenue = Decimal("0.00")
    for record in records:
        total += 1
        if record.status == QueueStatus.PENDING:
            pending += 1
        elif record.status == QueueStatus.IN_PROGRESS:
            in_progress += 1
        elif record.status == QueueStatus.COMPLETED:
            completed += 1
            revenue += Decimal(record.price)

    return QueueStats(
        total=total,
        pending=pending,
        in_progress=in_progress,
        completed=completed,
        revenue=revenue,
    )


def is_urgent(
    deadline: date,
    today: date,
    window_days: int = DEFAULT_URGENT_WINDOW_DAYS,
) -> bool:
    """
    Check if a deadline falls within the urgency window.

    The window is inclusive and has no lower bound, so overdue work is
    urgent too. Status is not considered.
    """
    return deadline <= today + timedelta(days=window_days)


def status_badge(status: str, locale: str = DEFAULT_LOCALE) -> StatusBadge:
    """
    Look up the label and color for a status.

    Values outside the four lifecycle states get the gray "unknown" badge.
    """
    labels = STATUS_LABELS[_locale(locale)]
    if status in STATUS_COLORS:
        return StatusBadge(label=labels[status], color=STATUS_COLORS[status])
    return StatusBadge(
        label=labels[UNKNOWN_STATUS_KEY],
        color=UNKNOWN_STATUS_COLOR,
        known=False,
    )


def format_price(price: Decimal, currency_symbol: str = "฿") -> str:
    """Format a price with thousands separators and two decimals."""
    return f"{currency_symbol}{Decimal(price):,.2f}"


def format_deadline(deadline: date) -> str:
    return deadline.strftime(DEADLINE_FORMAT)


def format_created_at(created_at: datetime) -> str:
    return created_at.strftime(CREATED_AT_FORMAT)


def status_options(locale: str = DEFAULT_LOCALE) -> list[tuple[str, str]]:
    """(value, label) pairs for the inline status selector."""
    labels = STATUS_LABELS[_locale(locale)]
    return [(status.value, labels[status.value]) for status in QueueStatus]


def rejection_message(rejection: Rejection, locale: str = DEFAULT_LOCALE) -> str:
    """Render a rejection as a human-readable sentence."""
    locale = _locale(locale)
    field = FIELD_LABELS[locale].get(rejection.field, rejection.field)
    return REJECTION_MESSAGES[locale][rejection.reason].format(field=field)


def board_text(locale: str = DEFAULT_LOCALE) -> BoardText:
    """Page headings, stat captions and form labels for a locale."""
    locale = _locale(locale)
    fields = FIELD_LABELS[locale]
    return BoardText(
        customer_name=fields["customer_name"],
        discord_id=fields["discord_id"],
        price=fields["price"],
        deadline=fields["deadline"],
        description=fields["description"],
        status=fields["status"],
        **PAGE_TEXT[locale],
    )


def build_record_view(
    record: RecordLike,
    today: date,
    settings: Settings,
) -> RecordView:
    """Build the display values for one record."""
    return RecordView(
        id=record.id,
        customer_name=record.customer_name,
        contact_handle=record.discord_id,
        price=format_price(record.price, settings.currency_symbol),
        deadline=format_deadline(record.deadline),
        urgent=is_urgent(record.deadline, today, settings.urgent_window_days),
        status=record.status,
        badge=status_badge(record.status, settings.display_locale),
        description_lines=record.description.splitlines(),
        created_at=format_created_at(record.created_at),
    )


def build_board(
    records: Sequence[RecordLike],
    today: date,
    settings: Settings,
    rejections: Iterable[Rejection] = (),
) -> BoardView:
    """
    Build the full board view.

    Args:
        records: Records in display order, as returned by the repository.
        today: The date urgency is measured from.
        settings: Display settings (locale, currency, urgency window).
        rejections: Rejections from the previous submission, if any.

    Returns:
        BoardView ready for the template.
    """
    stats = compute_stats(records)
    return BoardView(
        stats=stats,
        revenue_display=format_price(stats.revenue, settings.currency_symbol),
        text=board_text(settings.display_locale),
        records=[build_record_view(r, today, settings) for r in records],
        status_options=status_options(settings.display_locale),
        rejection_messages=[
            rejection_message(r, settings.display_locale) for r in rejections
        ],
    )
