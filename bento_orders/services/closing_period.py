"""Billing ("closing") period calculation.

A closing period runs from the day after the previous month's closing date
up to and including this month's closing date. Closing days beyond a month's
length are clamped to that month's last day, so a closing day of 31 behaves
as "end of month" in every month.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from bento_orders.utils.time import add_months, clamp_day, last_day_of_month


@dataclass(frozen=True)
class ClosingPeriod:
    start_date: date
    end_date: date

    @property
    def label(self) -> str:
        return f"{_label_date(self.start_date)} ～ {_label_date(self.end_date)}"

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class PeriodLookup:
    current_period: ClosingPeriod | None
    next_period: ClosingPeriod | None


def _label_date(value: date) -> str:
    return f"{value.year}年{value.month}月{value.day}日"


def validate_closing_day(closing_day: int | None) -> None:
    if closing_day is not None and not 1 <= closing_day <= 31:
        raise ValueError("closing_day must be between 1 and 31, or None for end of month")


def period_for_month(closing_day: int | None, year: int, month: int) -> ClosingPeriod:
    """Return the closing period that ends in ``year``/``month``.

    The start is the day after the previous month's clamped closing date,
    not ``closing_day + 1`` clamped, so consecutive periods never overlap.
    """
    if closing_day is None:
        return ClosingPeriod(
            start_date=date(year, month, 1),
            end_date=date(year, month, last_day_of_month(year, month)),
        )

    prev_year, prev_month = add_months(year, month, -1)
    previous_close: date = clamp_day(prev_year, prev_month, closing_day)
    return ClosingPeriod(
        start_date=previous_close + timedelta(days=1),
        end_date=clamp_day(year, month, closing_day),
    )


def compute_closing_periods(
    closing_day: int | None,
    window_count: int,
    *,
    today: date,
    months_ahead: int = 0,
) -> list[ClosingPeriod]:
    """Return ``window_count`` consecutive periods, most recent first.

    Index 0 is the period ending in today's month shifted by ``months_ahead``;
    each following index steps one month back.
    """
    validate_closing_day(closing_day)
    if window_count < 0:
        raise ValueError("window_count must not be negative")

    periods: list[ClosingPeriod] = []
    for index in range(window_count):
        year, month = add_months(today.year, today.month, months_ahead - index)
        periods.append(period_for_month(closing_day, year, month))
    return periods


def locate_current_and_next(periods: list[ClosingPeriod], today: date) -> PeriodLookup:
    """Find the period containing ``today`` and the one right after it.

    ``periods`` must be ordered most recent first. When no period contains
    ``today`` the most recent one is reported as current.
    """
    for index, period in enumerate(periods):
        if period.contains(today):
            next_period = periods[index - 1] if index > 0 else None
            return PeriodLookup(current_period=period, next_period=next_period)

    if not periods:
        return PeriodLookup(current_period=None, next_period=None)
    return PeriodLookup(
        current_period=periods[0],
        next_period=periods[1] if len(periods) > 1 else None,
    )


def closing_period_for(closing_day: int | None, day: date) -> ClosingPeriod:
    """Return the closing period that contains ``day``."""
    validate_closing_day(closing_day)
    period = period_for_month(closing_day, day.year, day.month)
    if period.contains(day):
        return period
    year, month = add_months(day.year, day.month, 1)
    return period_for_month(closing_day, year, month)
