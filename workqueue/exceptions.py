"""
Domain exceptions raised by the request and storage layers.
"""

from collections.abc import Iterable

from workqueue.types.submissions import Rejection


class WorkQueueError(Exception):
    """Base class for work queue errors."""


class StorageUnavailableError(WorkQueueError):
    """Raised when the database cannot be reached or initialized at startup."""


class SubmissionRejected(WorkQueueError):
    """
    Raised when a submission fails validation at the request boundary.

    Carries every rejection found, so callers can report all of them at once.
    """

    def __init__(self, rejections: Iterable[Rejection]):
        self.rejections = list(rejections)
        summary = ", ".join(f"{r.field}:{r.reason}" for r in self.rejections)
        super().__init__(f"Submission rejected ({summary})")

    @property
    def reasons(self) -> list[str]:
        """Rejection reason codes, in the order they were found."""
        return [str(r.reason) for r in self.rejections]
