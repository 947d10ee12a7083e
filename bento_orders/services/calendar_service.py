"""Ordering calendar lookups and administrator upserts."""

from __future__ import annotations

import logging
from datetime import date, time, timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session

from bento_orders.models import CalendarDay
from bento_orders.services.admission import CalendarLookup, calendar_lookup_from_row
from bento_orders.utils.time import parse_iso_date, parse_time_of_day

logger = logging.getLogger(__name__)


def get_calendar_day(db: Session, target_date: date) -> CalendarDay | None:
    return db.get(CalendarDay, target_date)


def lookup_calendar(db: Session, target_date: date) -> CalendarLookup:
    return calendar_lookup_from_row(get_calendar_day(db, target_date))


def list_calendar_days(db: Session, start: date, end: date) -> list[CalendarDay]:
    return list(
        db.scalars(
            select(CalendarDay)
            .where(CalendarDay.target_date >= start, CalendarDay.target_date <= end)
            .order_by(CalendarDay.target_date.asc())
        ).all()
    )


def upsert_calendar_day(
    db: Session,
    *,
    target_date: str,
    is_available: bool,
    deadline_time: str | None,
    note: str | None,
    default_deadline: time,
) -> CalendarDay:
    """Create or update the calendar row for ``target_date``.

    Raises ``InvalidDateFormat`` / ``InvalidTimeFormat`` for malformed input.
    An available day without an explicit deadline gets ``default_deadline``;
    an unavailable day never stores a deadline.
    """
    parsed_date: date = parse_iso_date(target_date)
    parsed_deadline: time | None = parse_time_of_day(deadline_time) if deadline_time else None

    final_deadline: time | None = None
    if is_available:
        final_deadline = parsed_deadline or default_deadline

    row: CalendarDay | None = get_calendar_day(db, parsed_date)
    if row is None:
        row = CalendarDay(target_date=parsed_date)
        db.add(row)
    row.is_available = is_available
    row.deadline_time = final_deadline
    row.note = note or None

    db.commit()
    db.refresh(row)
    logger.info(
        "[CALENDAR] %s available=%s deadline=%s", parsed_date.isoformat(), is_available, final_deadline
    )
    return row


def find_next_available_day(db: Session, after: date, search_days: int) -> date | None:
    """Return the first available date strictly after ``after`` within ``search_days``."""
    end: date = after + timedelta(days=search_days)
    return db.scalar(
        select(CalendarDay.target_date)
        .where(
            CalendarDay.target_date > after,
            CalendarDay.target_date <= end,
            CalendarDay.is_available.is_(True),
        )
        .order_by(CalendarDay.target_date.asc())
        .limit(1)
    )
