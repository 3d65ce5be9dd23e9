"""
Type definitions for the work queue tracker.
Contains input/output type definitions for all functions, grouped by module.
"""

from workqueue.types.api import (
    CreateRecordRequest,
    HealthResponse,
    QueueListResponse,
    QueueRecordResponse,
    QueueStatsResponse,
    RejectionResponse,
    UpdateStatusRequest,
    ValidationErrorResponse,
)
from workqueue.types.submissions import (
    NewRecord,
    Rejection,
    StatusChange,
)
from workqueue.types.view import (
    BoardText,
    BoardView,
    QueueStats,
    RecordView,
    StatusBadge,
)

__all__ = [
    # API types
    "CreateRecordRequest",
    "UpdateStatusRequest",
    "QueueRecordResponse",
    "QueueStatsResponse",
    "QueueListResponse",
    "RejectionResponse",
    "ValidationErrorResponse",
    "HealthResponse",
    # Submission types
    "NewRecord",
    "Rejection",
    "StatusChange",
    # View types
    "QueueStats",
    "StatusBadge",
    "RecordView",
    "BoardText",
    "BoardView",
]
