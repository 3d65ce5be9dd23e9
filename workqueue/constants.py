"""
Application constants.
Centralized location for all constant values used across the application.
"""

from enum import StrEnum


class QueueStatus(StrEnum):
    """
    Queue record lifecycle states.

    Typical flow:
    - PENDING -> IN_PROGRESS (operator starts the work)
    - IN_PROGRESS -> COMPLETED (delivered, counts toward revenue)
    - any -> CANCELLED

    Any state may be set from any other; the operator is trusted.
    """

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class SubmissionAction(StrEnum):
    """Action discriminator values accepted by the board form."""

    ADD = "add"
    UPDATE_STATUS = "update_status"
    DELETE = "delete"


class RejectionReason(StrEnum):
    """Reasons a submission can be rejected at the request boundary."""

    REQUIRED = "required"
    NOT_POSITIVE = "not_positive"
    TOO_LARGE = "too_large"
    INVALID_DATE = "invalid_date"
    INVALID_STATUS = "invalid_status"
    UNKNOWN_ACTION = "unknown_action"


# Badge colors
STATUS_COLORS: dict[str, str] = {
    QueueStatus.PENDING.value: "#ffc107",
    QueueStatus.IN_PROGRESS.value: "#007bff",
    QueueStatus.COMPLETED.value: "#28a745",
    QueueStatus.CANCELLED.value: "#dc3545",
}
UNKNOWN_STATUS_COLOR = "#6c757d"
UNKNOWN_STATUS_KEY = "unknown"

# Badge labels per display locale
STATUS_LABELS: dict[str, dict[str, str]] = {
    "en": {
        QueueStatus.PENDING.value: "pending",
        QueueStatus.IN_PROGRESS.value: "in progress",
        QueueStatus.COMPLETED.value: "completed",
        QueueStatus.CANCELLED.value: "cancelled",
        UNKNOWN_STATUS_KEY: "unknown",
    },
    "th": {
        QueueStatus.PENDING.value: "รอดำเนินการ",
        QueueStatus.IN_PROGRESS.value: "กำลังทำ",
        QueueStatus.COMPLETED.value: "เสร็จแล้ว",
        QueueStatus.CANCELLED.value: "ยกเลิก",
        UNKNOWN_STATUS_KEY: "ไม่ทราบสถานะ",
    },
}
DEFAULT_LOCALE = "en"

# Default values
DEFAULT_STATUS = QueueStatus.PENDING
DEFAULT_URGENT_WINDOW_DAYS = 3
PRICE_QUANTUM = "0.01"

# Ids are 64-bit signed integers in every supported backend
MAX_RECORD_ID = 2**63 - 1

# Display formats
DEADLINE_FORMAT = "%d/%m/%Y"
CREATED_AT_FORMAT = "%d/%m/%Y %H:%M"

# API constants
API_V1_PREFIX = "/v1"
BOARD_PATH = "/"
REJECTED_QUERY_PARAM = "rejected"

# Metrics names
METRIC_RECORDS_CREATED = "queue_records_created_total"
METRIC_STATUS_UPDATES = "queue_status_updates_total"
METRIC_RECORDS_DELETED = "queue_records_deleted_total"
METRIC_SUBMISSIONS_REJECTED = "queue_submissions_rejected_total"
METRIC_API_REQUESTS = "api_requests_total"
METRIC_API_LATENCY = "api_request_latency_seconds"

# Trace span names
SPAN_ADD_RECORD = "add_record"
SPAN_UPDATE_STATUS = "update_status"
SPAN_DELETE_RECORD = "delete_record"
SPAN_RENDER_BOARD = "render_board"
