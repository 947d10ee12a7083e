"""Order admission rule tests (no database)."""

from datetime import date, datetime, time, timedelta
from types import SimpleNamespace

import pytest

from bento_orders.services.admission import (
    AvailableDay,
    DenialReason,
    NoRecord,
    OrderOperation,
    UnavailableDay,
    calendar_lookup_from_row,
    check_many,
    check_order_admission,
)

NOW = datetime(2025, 3, 10, 9, 30)
TODAY = NOW.date()
OPEN_TEN = AvailableDay(deadline=time(10, 0))


def _check(order_date, *, role="user", operation=OrderOperation.CREATE, now=NOW, calendar=OPEN_TEN, max_days=None):
    return check_order_admission(
        order_date,
        role,
        operation,
        now=now,
        calendar=calendar,
        max_order_days_ahead=max_days,
    )


def test_available_future_date_is_allowed() -> None:
    decision = _check("2025-03-12")

    assert decision.allowed is True
    assert decision.reason is None
    assert decision.order_date == date(2025, 3, 12)


@pytest.mark.parametrize("raw", ["2025-3-12", "garbage", "2025-02-30", ""])
def test_invalid_dates_are_rejected_not_raised(raw: str) -> None:
    decision = _check(raw)

    assert decision.allowed is False
    assert decision.reason is DenialReason.INVALID_DATE
    assert decision.order_date is None


@pytest.mark.parametrize("calendar", [OPEN_TEN, UnavailableDay(), NoRecord(), AvailableDay()])
def test_past_dates_are_denied_regardless_of_calendar(calendar) -> None:
    decision = _check("2025-03-09", calendar=calendar)

    assert decision.reason is DenialReason.PAST_DATE


@pytest.mark.parametrize("operation", list(OrderOperation))
def test_past_dates_are_denied_for_admins_too(operation: OrderOperation) -> None:
    assert _check("2025-01-31", role="admin", operation=operation).reason is DenialReason.PAST_DATE


def test_days_ahead_bound_is_inclusive() -> None:
    at_limit = _check(TODAY + timedelta(days=14), max_days=14, calendar=AvailableDay())
    beyond = _check(TODAY + timedelta(days=15), max_days=14, calendar=AvailableDay())

    assert at_limit.allowed is True
    assert beyond.reason is DenialReason.TOO_FAR_AHEAD


def test_zero_days_ahead_allows_only_today() -> None:
    assert _check(TODAY, max_days=0).allowed is True
    assert _check(TODAY + timedelta(days=1), max_days=0).reason is DenialReason.TOO_FAR_AHEAD


def test_unset_days_ahead_means_unbounded() -> None:
    assert _check("2026-12-31", max_days=None).allowed is True


def test_too_far_ahead_wins_over_unavailable_day() -> None:
    decision = _check(TODAY + timedelta(days=40), max_days=30, calendar=NoRecord())

    assert decision.reason is DenialReason.TOO_FAR_AHEAD


@pytest.mark.parametrize("role", ["user", "admin"])
@pytest.mark.parametrize("operation", list(OrderOperation))
def test_missing_calendar_record_means_unavailable(role: str, operation: OrderOperation) -> None:
    decision = _check("2025-03-11", role=role, operation=operation, calendar=NoRecord())

    assert decision.reason is DenialReason.DATE_UNAVAILABLE


def test_closed_day_is_unavailable() -> None:
    assert _check("2025-03-11", calendar=UnavailableDay()).reason is DenialReason.DATE_UNAVAILABLE


def test_same_day_deadline_is_strict() -> None:
    before = _check(TODAY, now=datetime(2025, 3, 10, 9, 59, 59))
    at_deadline = _check(TODAY, now=datetime(2025, 3, 10, 10, 0, 0))
    after = _check(TODAY, now=datetime(2025, 3, 10, 15, 0))

    assert before.allowed is True
    assert at_deadline.reason is DenialReason.DEADLINE_PASSED
    assert after.reason is DenialReason.DEADLINE_PASSED


def test_deadline_does_not_apply_to_future_dates() -> None:
    late_evening = datetime(2025, 3, 10, 23, 30)

    assert _check("2025-03-11", now=late_evening).allowed is True


def test_available_day_without_deadline_accepts_orders_until_midnight() -> None:
    decision = _check(TODAY, now=datetime(2025, 3, 10, 23, 59, 59), calendar=AvailableDay(deadline=None))

    assert decision.allowed is True


@pytest.mark.parametrize("operation", [OrderOperation.CREATE, OrderOperation.EDIT])
def test_admin_does_not_bypass_deadline_for_create_or_edit(operation: OrderOperation) -> None:
    decision = _check(TODAY, role="admin", operation=operation, now=datetime(2025, 3, 10, 11, 0))

    assert decision.reason is DenialReason.DEADLINE_PASSED


@pytest.mark.parametrize("operation", [OrderOperation.CANCEL, OrderOperation.REASSIGN])
def test_admin_cancel_and_reassign_skip_deadline(operation: OrderOperation) -> None:
    late = datetime(2025, 3, 10, 11, 0)

    assert _check(TODAY, role="admin", operation=operation, now=late).allowed is True
    assert _check(TODAY, role="user", operation=operation, now=late).reason is DenialReason.DEADLINE_PASSED


def test_admin_cancel_still_requires_available_day() -> None:
    decision = _check(TODAY, role="admin", operation=OrderOperation.CANCEL, calendar=UnavailableDay())

    assert decision.reason is DenialReason.DATE_UNAVAILABLE


def test_decision_message_is_reported_for_denials() -> None:
    assert _check("2025-03-01").message
    assert _check("2025-03-12").message is None


def test_calendar_lookup_from_row_mapping() -> None:
    assert calendar_lookup_from_row(None) == NoRecord()
    assert calendar_lookup_from_row(SimpleNamespace(is_available=False, deadline_time=time(10, 0))) == UnavailableDay()
    assert calendar_lookup_from_row(SimpleNamespace(is_available=True, deadline_time=None)) == AvailableDay()
    assert calendar_lookup_from_row(SimpleNamespace(is_available=True, deadline_time=time(9, 0))) == AvailableDay(
        deadline=time(9, 0)
    )


def test_check_many_evaluates_each_date_independently() -> None:
    calendars = {
        date(2025, 3, 10): OPEN_TEN,
        date(2025, 3, 11): AvailableDay(),
        date(2025, 3, 12): UnavailableDay(),
    }
    seen: list[date] = []

    def calendar_for(target: date):
        seen.append(target)
        return calendars.get(target, NoRecord())

    decisions = check_many(
        ["2025-03-10", "2025-03-11", "2025-03-12", "2025-03-13", "bad", "2025-03-01"],
        "user",
        OrderOperation.CREATE,
        now=datetime(2025, 3, 10, 10, 30),
        calendar_for=calendar_for,
    )

    assert [decision.reason for decision in decisions] == [
        DenialReason.DEADLINE_PASSED,
        None,
        DenialReason.DATE_UNAVAILABLE,
        DenialReason.DATE_UNAVAILABLE,
        DenialReason.INVALID_DATE,
        DenialReason.PAST_DATE,
    ]
    assert date(2025, 3, 13) in seen
