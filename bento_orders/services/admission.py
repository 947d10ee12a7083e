"""Order admission rules: may this order action happen right now?

The checks run in a fixed order and the first failing one decides the denial
reason. Denials are returned, never raised, so callers can validate many
dates in one pass.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum

from bento_orders.utils.time import InvalidDateFormat, days_between, parse_iso_date


class DenialReason(str, Enum):
    INVALID_DATE = "INVALID_DATE"
    PAST_DATE = "PAST_DATE"
    TOO_FAR_AHEAD = "TOO_FAR_AHEAD"
    DATE_UNAVAILABLE = "DATE_UNAVAILABLE"
    DEADLINE_PASSED = "DEADLINE_PASSED"


DENIAL_MESSAGES: dict[DenialReason, str] = {
    DenialReason.INVALID_DATE: "Invalid order date (expected YYYY-MM-DD).",
    DenialReason.PAST_DATE: "Orders for past dates cannot be changed.",
    DenialReason.TOO_FAR_AHEAD: "The order date is beyond the allowed ordering range.",
    DenialReason.DATE_UNAVAILABLE: "Ordering is not available on this date.",
    DenialReason.DEADLINE_PASSED: "The ordering deadline for today has passed.",
}


class OrderOperation(str, Enum):
    CREATE = "create"
    EDIT = "edit"
    CANCEL = "cancel"
    REASSIGN = "reassign"


ADMIN_ROLE = "admin"

# Operations where an administrator may act after today's deadline.
DEADLINE_EXEMPT_ADMIN_OPERATIONS: frozenset[OrderOperation] = frozenset(
    {OrderOperation.CANCEL, OrderOperation.REASSIGN}
)


@dataclass(frozen=True)
class AvailableDay:
    """Calendar row exists and accepts orders."""

    deadline: time | None = None


@dataclass(frozen=True)
class UnavailableDay:
    """Calendar row exists and is closed for orders."""


@dataclass(frozen=True)
class NoRecord:
    """No calendar row for the date; treated as closed."""


CalendarLookup = AvailableDay | UnavailableDay | NoRecord


def calendar_lookup_from_row(row) -> CalendarLookup:
    """Map a stored calendar row (or ``None``) to a lookup state."""
    if row is None:
        return NoRecord()
    if not row.is_available:
        return UnavailableDay()
    return AvailableDay(deadline=row.deadline_time)


@dataclass(frozen=True)
class AdmissionDecision:
    allowed: bool
    reason: DenialReason | None = None
    order_date: date | None = None

    @property
    def message(self) -> str | None:
        if self.reason is None:
            return None
        return DENIAL_MESSAGES[self.reason]


def _deny(reason: DenialReason, order_date: date | None = None) -> AdmissionDecision:
    return AdmissionDecision(allowed=False, reason=reason, order_date=order_date)


def is_deadline_exempt(actor_role: str, operation: OrderOperation) -> bool:
    return actor_role == ADMIN_ROLE and operation in DEADLINE_EXEMPT_ADMIN_OPERATIONS


def check_order_admission(
    order_date: str | date,
    actor_role: str,
    operation: OrderOperation,
    *,
    now: datetime,
    calendar: CalendarLookup,
    max_order_days_ahead: int | None = None,
) -> AdmissionDecision:
    """Decide whether ``operation`` on ``order_date`` is permitted at ``now``.

    Checks, first failure wins:

    1. the date parses (``INVALID_DATE``)
    2. the date is today or later (``PAST_DATE``)
    3. the date is within ``max_order_days_ahead`` days (``TOO_FAR_AHEAD``)
    4. the calendar marks the date available (``DATE_UNAVAILABLE``)
    5. for today's date, ``now`` is strictly before the deadline
       (``DEADLINE_PASSED``); admins skip this for cancel and reassign.

    Proxy orders placed by an administrator go through the same sequence;
    choosing whose order it is stays with the caller.
    """
    if isinstance(order_date, date):
        target: date = order_date
    else:
        try:
            target = parse_iso_date(order_date)
        except InvalidDateFormat:
            return _deny(DenialReason.INVALID_DATE)

    current_day: date = now.date()
    if target < current_day:
        return _deny(DenialReason.PAST_DATE, target)

    if max_order_days_ahead is not None and days_between(current_day, target) > max_order_days_ahead:
        return _deny(DenialReason.TOO_FAR_AHEAD, target)

    if not isinstance(calendar, AvailableDay):
        return _deny(DenialReason.DATE_UNAVAILABLE, target)

    if target == current_day and calendar.deadline is not None and not is_deadline_exempt(actor_role, operation):
        deadline_at: datetime = datetime.combine(current_day, calendar.deadline)
        if now >= deadline_at:
            return _deny(DenialReason.DEADLINE_PASSED, target)

    return AdmissionDecision(allowed=True, order_date=target)


def check_many(
    order_dates: Iterable[str | date],
    actor_role: str,
    operation: OrderOperation,
    *,
    now: datetime,
    calendar_for,
    max_order_days_ahead: int | None = None,
) -> list[AdmissionDecision]:
    """Evaluate several dates against one captured ``now``.

    ``calendar_for`` receives each parsed date and returns its lookup state.
    """
    decisions: list[AdmissionDecision] = []
    for raw_date in order_dates:
        if isinstance(raw_date, date):
            target: date = raw_date
        else:
            try:
                target = parse_iso_date(raw_date)
            except InvalidDateFormat:
                decisions.append(_deny(DenialReason.INVALID_DATE))
                continue
        decisions.append(
            check_order_admission(
                target,
                actor_role,
                operation,
                now=now,
                calendar=calendar_for(target),
                max_order_days_ahead=max_order_days_ahead,
            )
        )
    return decisions
