"""Administrator endpoints: calendar, settings, closing periods and order fixes."""

import logging
from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from bento_orders.api.v1.errors import ORDER_ERRORS, order_http_error
from bento_orders.core.config import settings
from bento_orders.core.security import require_admin
from bento_orders.db.session import get_db
from bento_orders.models import CalendarDay, Order, User
from bento_orders.schemas.calendar import CalendarDayRead, CalendarDayUpdate
from bento_orders.schemas.closing_period import ClosingPeriodRead, PeriodSummaryItem, PeriodSummaryResponse
from bento_orders.schemas.order import OrderChangeUser, OrderResponse
from bento_orders.schemas.settings import SystemSettingsRead, SystemSettingsUpdate, SystemSettingsUpdateResponse
from bento_orders.services import order_service
from bento_orders.services.audit_service import log_action
from bento_orders.services.calendar_service import list_calendar_days, upsert_calendar_day
from bento_orders.services.closing_period import closing_period_for, compute_closing_periods
from bento_orders.services.settings_service import (
    SettingsValidationError,
    get_system_settings,
    update_system_settings,
)
from bento_orders.services.user_service import deactivate_departed_users
from bento_orders.utils import time as time_utils
from bento_orders.utils.time import InvalidDateFormat, InvalidTimeFormat, format_iso_date, format_time_of_day

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


@router.put("/calendar", response_model=CalendarDayRead)
def update_calendar_day(
    payload: CalendarDayUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> CalendarDay:
    try:
        row = upsert_calendar_day(
            db,
            target_date=payload.target_date,
            is_available=payload.is_available,
            deadline_time=payload.deadline_time,
            note=payload.note,
            default_deadline=get_system_settings(db).default_deadline_time,
        )
    except (InvalidDateFormat, InvalidTimeFormat) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    log_action(
        db,
        actor=admin,
        action="calendar.update",
        target_table="order_calendar",
        target_id=format_iso_date(row.target_date),
        details={
            "is_available": row.is_available,
            "deadline_time": format_time_of_day(row.deadline_time) if row.deadline_time else None,
            "note": row.note,
        },
    )
    return row


@router.get("/calendar", response_model=list[CalendarDayRead])
def get_calendar(
    start_date: date,
    end_date: date,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> list[CalendarDay]:
    if end_date < start_date:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="end_date must not be before start_date")
    return list_calendar_days(db, start_date, end_date)


@router.get("/settings", response_model=SystemSettingsRead)
def get_settings(db: Session = Depends(get_db), admin: User = Depends(require_admin)) -> SystemSettingsRead:
    return SystemSettingsRead.model_validate(get_system_settings(db))


@router.put("/settings", response_model=SystemSettingsUpdateResponse)
def update_settings(
    payload: SystemSettingsUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> SystemSettingsUpdateResponse:
    changes = payload.model_dump(exclude_unset=True)
    today: date = time_utils.today(time_utils.current_local_datetime())
    try:
        row, rewritten = update_system_settings(db, changes, today=today)
    except SettingsValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    log_action(
        db,
        actor=admin,
        action="settings.update",
        target_table="system_settings",
        target_id=row.id,
        details={**changes, "calendar_days_updated": rewritten},
    )
    return SystemSettingsUpdateResponse(
        max_order_days_ahead=row.max_order_days_ahead,
        closing_day=row.closing_day,
        default_deadline_time=row.default_deadline_time,
        calendar_days_updated=rewritten,
    )


@router.get("/closing-periods", response_model=list[ClosingPeriodRead])
def list_closing_periods(
    count: int = Query(default=settings.closing_period_months, ge=1, le=120),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> list[ClosingPeriodRead]:
    """Most recent billing periods first, starting with the one ending this month."""
    today: date = time_utils.today(time_utils.current_local_datetime())
    periods = compute_closing_periods(get_system_settings(db).closing_day, count, today=today)
    return [ClosingPeriodRead.model_validate(period) for period in periods]


@router.get("/reports/summary", response_model=PeriodSummaryResponse)
def period_summary(
    start_date: date | None = None,
    end_date: date | None = None,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> PeriodSummaryResponse:
    """Per-user order totals for a date range, defaulting to the current closing period."""
    if (start_date is None) != (end_date is None):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Provide both start_date and end_date")
    if start_date is None:
        today: date = time_utils.today(time_utils.current_local_datetime())
        period = closing_period_for(get_system_settings(db).closing_day, today)
        start_date, end_date = period.start_date, period.end_date
    if end_date < start_date:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="end_date must not be before start_date")

    rows = order_service.summarize_period(db, start=start_date, end=end_date)
    return PeriodSummaryResponse(
        start_date=start_date,
        end_date=end_date,
        items=[PeriodSummaryItem.model_validate(row) for row in rows],
    )


@router.patch("/orders/{order_id}/change-user", response_model=OrderResponse)
def change_order_user(
    order_id: int,
    payload: OrderChangeUser,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> Order:
    """Reassign an order to another user, allowed after today's deadline."""
    now: datetime = time_utils.current_local_datetime()
    try:
        return order_service.change_order_user(
            db, actor=admin, order_id=order_id, new_user_id=payload.new_user_id, now=now
        )
    except ORDER_ERRORS as exc:
        raise order_http_error(exc) from exc


@router.post("/users/deactivate-expired")
def deactivate_expired_users(
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> dict[str, list[int] | int]:
    today: date = time_utils.today(time_utils.current_local_datetime())
    user_ids = deactivate_departed_users(db, today)
    if user_ids:
        logger.info("[USERS] Deactivated %s departed user(s)", len(user_ids))
        log_action(
            db,
            actor=admin,
            action="users.deactivate_expired",
            target_table="users",
            details={"user_ids": user_ids},
        )
    return {"deactivated": len(user_ids), "user_ids": user_ids}
