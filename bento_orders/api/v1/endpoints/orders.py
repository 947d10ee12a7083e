"""Order endpoints."""

from datetime import date, datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from bento_orders.api.v1.errors import ORDER_ERRORS, order_http_error
from bento_orders.core.config import settings
from bento_orders.core.security import get_current_user
from bento_orders.db.session import get_db
from bento_orders.models.order import Order
from bento_orders.models.user import User
from bento_orders.schemas.order import (
    AdmissionCheckRequest,
    AdmissionResult,
    NextAvailableDayResponse,
    OrderCreate,
    OrderResponse,
    OrderUpdate,
)
from bento_orders.services import order_service
from bento_orders.services.admission import check_many
from bento_orders.services.calendar_service import find_next_available_day, lookup_calendar
from bento_orders.services.settings_service import get_system_settings
from bento_orders.utils import time as time_utils

router: APIRouter = APIRouter()


@router.post("", response_model=OrderResponse)
def create_order(
    payload: OrderCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Order:
    """Place an order for the caller, or for ``user_id`` when an admin proxies."""
    now: datetime = time_utils.current_local_datetime()
    try:
        return order_service.create_order(
            db,
            actor=current_user,
            order_date=payload.order_date,
            quantity=payload.quantity,
            user_id=payload.user_id,
            now=now,
        )
    except ORDER_ERRORS as exc:
        raise order_http_error(exc) from exc


@router.get("/me", response_model=list[OrderResponse])
def get_my_orders(
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[Order]:
    return order_service.list_user_orders(db, user_id=current_user.id, start=start_date, end=end_date)


@router.post("/admission-check", response_model=list[AdmissionResult])
def admission_check(
    payload: AdmissionCheckRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[AdmissionResult]:
    """Report, per date, whether the operation would be accepted right now."""
    now: datetime = time_utils.current_local_datetime()
    decisions = check_many(
        payload.dates,
        current_user.role,
        payload.operation,
        now=now,
        calendar_for=lambda target: lookup_calendar(db, target),
        max_order_days_ahead=get_system_settings(db).max_order_days_ahead,
    )
    return [
        AdmissionResult(
            order_date=raw_date,
            allowed=decision.allowed,
            reason=decision.reason.value if decision.reason else None,
            message=decision.message,
        )
        for raw_date, decision in zip(payload.dates, decisions)
    ]


@router.get("/next-available-day", response_model=NextAvailableDayResponse)
def next_available_day(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NextAvailableDayResponse:
    today: date = time_utils.today(time_utils.current_local_datetime())
    return NextAvailableDayResponse(
        next_available_date=find_next_available_day(db, today, settings.next_business_day_search_days)
    )


@router.put("/{order_id}", response_model=OrderResponse)
def update_order(
    order_id: int,
    payload: OrderUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Order:
    now: datetime = time_utils.current_local_datetime()
    try:
        return order_service.update_order(db, actor=current_user, order_id=order_id, quantity=payload.quantity, now=now)
    except ORDER_ERRORS as exc:
        raise order_http_error(exc) from exc


@router.patch("/{order_id}/cancel", response_model=OrderResponse)
def cancel_order(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Order:
    now: datetime = time_utils.current_local_datetime()
    try:
        return order_service.cancel_order(db, actor=current_user, order_id=order_id, now=now)
    except ORDER_ERRORS as exc:
        raise order_http_error(exc) from exc
