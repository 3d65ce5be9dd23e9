"""
Request boundary coercion and validation.

Form input arrives as loose strings. Malformed numbers and dates coerce to
zero/empty values, which then fail validation with a structured reason
instead of erroring out.
"""

from collections.abc import Mapping
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from workqueue.constants import (
    MAX_RECORD_ID,
    PRICE_QUANTUM,
    QueueStatus,
    RejectionReason,
    SubmissionAction,
)
from workqueue.exceptions import SubmissionRejected
from workqueue.types.submissions import NewRecord, Rejection, StatusChange

# Largest value a Numeric(10, 2) column holds
MAX_PRICE = Decimal("99999999.99")

REQUIRED_TEXT_FIELDS = ("customer_name", "discord_id", "description")


def clean_text(value: Any) -> str:
    """Trim a form value to a string; None becomes empty."""
    if value is None:
        return ""
    return str(value).strip()


def coerce_price(value: Any) -> Decimal:
    """
    Coerce a form value to a price with two decimal places.

    Args:
        value: Raw form value.

    Returns:
        The quantized price, or 0.00 if the value is not a finite number.
        Values beyond MAX_PRICE are returned unrounded so validation can
        reject them; quantizing them could exceed the decimal context.
    """
    try:
        price = Decimal(clean_text(value))
    except (InvalidOperation, ValueError):
        return Decimal("0.00")
    if not price.is_finite():
        return Decimal("0.00")
    if price.copy_abs() > MAX_PRICE:
        return price
    return price.quantize(Decimal(PRICE_QUANTUM), rounding=ROUND_HALF_UP)


def coerce_date(value: Any) -> date | None:
    """Parse an ISO date (YYYY-MM-DD); None if empty or malformed."""
    if isinstance(value, date):
        return value
    text = clean_text(value)
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def coerce_id(value: Any) -> int:
    """Parse a record id; 0 if malformed or out of range, which matches no record."""
    try:
        record_id = int(clean_text(value))
    except ValueError:
        return 0
    if not 1 <= record_id <= MAX_RECORD_ID:
        return 0
    return record_id


def parse_action(value: Any) -> SubmissionAction:
    """
    Resolve the form's action discriminator.

    Raises:
        SubmissionRejected: If the action is missing or unknown.
    """
    try:
        return SubmissionAction(clean_text(value))
    except ValueError:
        raise SubmissionRejected(
            [Rejection("action", RejectionReason.UNKNOWN_ACTION)]
        ) from None


def parse_status(value: Any) -> QueueStatus:
    """
    Check a status against the closed set of lifecycle states.

    Raises:
        SubmissionRejected: If the value is not a known status.
    """
    try:
        return QueueStatus(clean_text(value))
    except ValueError:
        raise SubmissionRejected(
            [Rejection("status", RejectionReason.INVALID_STATUS)]
        ) from None


def parse_new_record(form: Mapping[str, Any]) -> NewRecord:
    """
    Validate an add submission.

    Every field is checked so the caller gets all rejections at once.

    Args:
        form: Submitted fields (customer_name, discord_id, price,
            description, deadline).

    Returns:
        The validated record values.

    Raises:
        SubmissionRejected: If any field is empty, the price is not
            positive, or the deadline is not a date.
    """
    rejections: list[Rejection] = []

    text = {name: clean_text(form.get(name)) for name in REQUIRED_TEXT_FIELDS}
    for name, value in text.items():
        if not value:
            rejections.append(Rejection(name, RejectionReason.REQUIRED))

    price = coerce_price(form.get("price"))
    if price <= 0:
        rejections.append(Rejection("price", RejectionReason.NOT_POSITIVE))
    elif price > MAX_PRICE:
        rejections.append(Rejection("price", RejectionReason.TOO_LARGE))

    deadline = coerce_date(form.get("deadline"))
    if deadline is None:
        rejections.append(Rejection("deadline", RejectionReason.INVALID_DATE))

    if rejections:
        raise SubmissionRejected(rejections)

    return NewRecord(
        customer_name=text["customer_name"],
        contact_handle=text["discord_id"],
        price=price,
        description=text["description"],
        deadline=deadline,
    )


def parse_status_change(form: Mapping[str, Any]) -> StatusChange:
    """
    Validate an update-status submission.

    Raises:
        SubmissionRejected: If the status is not one of the four states.
    """
    return StatusChange(
        record_id=coerce_id(form.get("id")),
        status=parse_status(form.get("status")),
    )
