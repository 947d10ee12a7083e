"""Order operations guarded by the admission rules."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bento_orders.models import Order, User
from bento_orders.models.order import ORDER_STATUS_CANCELED, ORDER_STATUS_ORDERED
from bento_orders.services.admission import (
    AdmissionDecision,
    CalendarLookup,
    NoRecord,
    OrderOperation,
    check_order_admission,
)
from bento_orders.services.audit_service import log_action
from bento_orders.services.calendar_service import lookup_calendar
from bento_orders.services.settings_service import get_system_settings
from bento_orders.services.user_service import get_user_by_id, is_eligible_to_order
from bento_orders.utils.time import InvalidDateFormat, format_iso_date, parse_iso_date

logger = logging.getLogger(__name__)


class OrderAdmissionDenied(Exception):
    """Raised when the admission rules reject an order action."""

    def __init__(self, decision: AdmissionDecision) -> None:
        super().__init__(decision.message)
        self.decision = decision


class OrderConflictError(Exception):
    """Raised when the user already has an active order for the date."""


class OrderNotFoundError(Exception):
    """Raised when the order does not exist or is not visible to the actor."""


class OrderStateError(Exception):
    """Raised when the order's status does not permit the action."""


class UserNotEligibleError(Exception):
    """Raised when the target user is missing, inactive or has left."""


class ActorNotEligibleError(UserNotEligibleError):
    """Raised when a member who has left tries to change their own orders."""


@dataclass(frozen=True)
class PeriodSummaryRow:
    user_id: int
    full_name: str
    email: str
    order_count: int
    total_quantity: int


def _snapshot(order: Order) -> dict[str, str | int]:
    return {
        "user_id": order.user_id,
        "order_date": format_iso_date(order.order_date),
        "quantity": order.quantity,
        "status": order.status,
    }


def admit(
    db: Session,
    *,
    actor: User,
    order_date: str | date,
    operation: OrderOperation,
    now: datetime,
) -> AdmissionDecision:
    """Run the admission rules against the stored calendar and settings."""
    try:
        target = order_date if isinstance(order_date, date) else parse_iso_date(order_date)
        calendar: CalendarLookup = lookup_calendar(db, target)
    except InvalidDateFormat:
        calendar = NoRecord()

    decision = check_order_admission(
        order_date,
        actor.role,
        operation,
        now=now,
        calendar=calendar,
        max_order_days_ahead=get_system_settings(db).max_order_days_ahead,
    )
    if not decision.allowed:
        logger.info(
            "[ORDER] %s denied for actor_id=%s date=%s reason=%s",
            operation.value,
            actor.id,
            order_date,
            decision.reason.value,
        )
        raise OrderAdmissionDenied(decision)
    return decision


def _active_order_for(db: Session, user_id: int, order_date: date) -> Order | None:
    return db.scalar(
        select(Order)
        .where(
            Order.user_id == user_id,
            Order.order_date == order_date,
            Order.status == ORDER_STATUS_ORDERED,
        )
        .limit(1)
    )


def _load_order(db: Session, actor: User, order_id: int) -> Order:
    order: Order | None = db.get(Order, order_id)
    if order is None or (not actor.is_admin and order.user_id != actor.id):
        raise OrderNotFoundError
    return order


def _ensure_actor_eligible(actor: User, now: datetime) -> None:
    if not actor.is_admin and not is_eligible_to_order(actor, now.date()):
        raise ActorNotEligibleError


def _commit_or_conflict(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise OrderConflictError from exc


def create_order(
    db: Session,
    *,
    actor: User,
    order_date: str,
    quantity: int,
    now: datetime,
    user_id: int | None = None,
) -> Order:
    """Create an order for the actor, or for ``user_id`` when an admin proxies."""
    is_proxy_action: bool = actor.is_admin and user_id is not None and user_id != actor.id
    target_user: User | None = get_user_by_id(db, user_id) if is_proxy_action else actor
    if target_user is None or not is_eligible_to_order(target_user, now.date()):
        raise UserNotEligibleError

    decision = admit(db, actor=actor, order_date=order_date, operation=OrderOperation.CREATE, now=now)

    if _active_order_for(db, target_user.id, decision.order_date) is not None:
        raise OrderConflictError

    order = Order(
        user_id=target_user.id,
        order_date=decision.order_date,
        quantity=quantity,
        status=ORDER_STATUS_ORDERED,
    )
    db.add(order)
    _commit_or_conflict(db)
    db.refresh(order)

    log_action(
        db,
        actor=actor,
        action="order.create.admin" if is_proxy_action else "order.create",
        target_table="orders",
        target_id=order.id,
        details={**_snapshot(order), **({"ordered_by_admin": True} if is_proxy_action else {})},
    )
    return order


def update_order(db: Session, *, actor: User, order_id: int, quantity: int, now: datetime) -> Order:
    order = _load_order(db, actor, order_id)
    _ensure_actor_eligible(actor, now)
    if order.is_canceled:
        raise OrderStateError("Canceled orders cannot be edited")

    admit(db, actor=actor, order_date=order.order_date, operation=OrderOperation.EDIT, now=now)

    before = _snapshot(order)
    order.quantity = quantity
    db.commit()
    db.refresh(order)

    log_action(
        db,
        actor=actor,
        action="order.update.admin" if actor.is_admin else "order.update",
        target_table="orders",
        target_id=order.id,
        details={"before": before, "after": _snapshot(order)},
    )
    return order


def cancel_order(db: Session, *, actor: User, order_id: int, now: datetime) -> Order:
    order = _load_order(db, actor, order_id)
    _ensure_actor_eligible(actor, now)
    if order.is_canceled:
        raise OrderStateError("Order is already canceled")

    admit(db, actor=actor, order_date=order.order_date, operation=OrderOperation.CANCEL, now=now)

    order.status = ORDER_STATUS_CANCELED
    db.commit()
    db.refresh(order)

    is_proxy_action: bool = order.user_id != actor.id
    log_action(
        db,
        actor=actor,
        action="order.cancel.admin" if actor.is_admin else "order.cancel",
        target_table="orders",
        target_id=order.id,
        details={**_snapshot(order), **({"canceled_by_admin": True} if is_proxy_action else {})},
    )
    return order


def change_order_user(db: Session, *, actor: User, order_id: int, new_user_id: int, now: datetime) -> Order:
    """Move an order to another user (administrators only)."""
    if not actor.is_admin:
        raise PermissionError("Only administrators can reassign orders")

    order = _load_order(db, actor, order_id)
    if order.is_canceled:
        raise OrderStateError("Canceled orders cannot be reassigned")

    new_user: User | None = get_user_by_id(db, new_user_id)
    if new_user is None or not is_eligible_to_order(new_user, now.date()):
        raise UserNotEligibleError

    admit(db, actor=actor, order_date=order.order_date, operation=OrderOperation.REASSIGN, now=now)

    if new_user.id == order.user_id:
        return order
    if _active_order_for(db, new_user.id, order.order_date) is not None:
        raise OrderConflictError

    previous_user_id: int = order.user_id
    order.user_id = new_user.id
    _commit_or_conflict(db)
    db.refresh(order)

    log_action(
        db,
        actor=actor,
        action="order.change_user",
        target_table="orders",
        target_id=order.id,
        details={"from_user_id": previous_user_id, "to_user_id": new_user.id, **_snapshot(order)},
    )
    return order


def list_user_orders(db: Session, *, user_id: int, start: date | None, end: date | None) -> list[Order]:
    query = select(Order).where(Order.user_id == user_id)
    if start is not None:
        query = query.where(Order.order_date >= start)
    if end is not None:
        query = query.where(Order.order_date <= end)
    return list(db.scalars(query.order_by(Order.order_date.desc(), Order.id.desc())).all())


def summarize_period(db: Session, *, start: date, end: date) -> list[PeriodSummaryRow]:
    """Per-user totals of active orders between ``start`` and ``end`` inclusive."""
    rows = db.execute(
        select(
            User.id,
            User.full_name,
            User.email,
            func.count(Order.id),
            func.coalesce(func.sum(Order.quantity), 0),
        )
        .join(Order, Order.user_id == User.id)
        .where(
            Order.status == ORDER_STATUS_ORDERED,
            Order.order_date >= start,
            Order.order_date <= end,
        )
        .group_by(User.id, User.full_name, User.email)
        .order_by(User.id.asc())
    ).all()
    return [
        PeriodSummaryRow(
            user_id=user_id,
            full_name=full_name,
            email=email,
            order_count=int(order_count),
            total_quantity=int(total_quantity),
        )
        for user_id, full_name, email, order_count, total_quantity in rows
    ]
