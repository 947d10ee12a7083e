"""System settings helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, time
from typing import Any

from sqlalchemy import update
from sqlalchemy.orm import Session

from bento_orders.core.config import settings
from bento_orders.models import CalendarDay, SystemSetting
from bento_orders.models.system_setting import SYSTEM_SETTINGS_ID
from bento_orders.utils.time import InvalidTimeFormat, parse_time_of_day

logger = logging.getLogger(__name__)

MAX_ORDER_DAYS_AHEAD_LIMIT: int = 365
EDITABLE_FIELDS: frozenset[str] = frozenset({"max_order_days_ahead", "closing_day", "default_deadline_time"})


class SettingsValidationError(ValueError):
    """Raised when a settings update carries an out-of-range value."""


@dataclass(frozen=True)
class SettingsSnapshot:
    """Read-only view of the settings the ordering engine consumes."""

    max_order_days_ahead: int | None = None
    closing_day: int | None = None
    default_deadline_time: time = settings.app_default_deadline_time


def get_settings_row(db: Session) -> SystemSetting | None:
    return db.get(SystemSetting, SYSTEM_SETTINGS_ID)


def get_system_settings(db: Session) -> SettingsSnapshot:
    """Read settings; a missing row means no constraints."""
    row: SystemSetting | None = get_settings_row(db)
    if row is None:
        return SettingsSnapshot()
    return SettingsSnapshot(
        max_order_days_ahead=row.max_order_days_ahead,
        closing_day=row.closing_day,
        default_deadline_time=row.default_deadline_time or settings.app_default_deadline_time,
    )


def _validate_changes(changes: dict[str, Any]) -> dict[str, Any]:
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise SettingsValidationError(f"Unknown settings: {', '.join(sorted(unknown))}")

    validated: dict[str, Any] = {}
    if "closing_day" in changes:
        closing_day = changes["closing_day"]
        if closing_day is not None and not 1 <= closing_day <= 31:
            raise SettingsValidationError("closing_day must be between 1 and 31 (null for end of month)")
        validated["closing_day"] = closing_day

    if "max_order_days_ahead" in changes:
        days_ahead = changes["max_order_days_ahead"]
        if days_ahead is not None and not 1 <= days_ahead <= MAX_ORDER_DAYS_AHEAD_LIMIT:
            raise SettingsValidationError(
                f"max_order_days_ahead must be between 1 and {MAX_ORDER_DAYS_AHEAD_LIMIT}"
            )
        validated["max_order_days_ahead"] = days_ahead

    if changes.get("default_deadline_time") is not None:
        raw_deadline = changes["default_deadline_time"]
        try:
            validated["default_deadline_time"] = (
                raw_deadline if isinstance(raw_deadline, time) else parse_time_of_day(raw_deadline)
            )
        except InvalidTimeFormat as exc:
            raise SettingsValidationError(str(exc)) from exc

    return validated


def update_system_settings(db: Session, changes: dict[str, Any], *, today: date) -> tuple[SystemSetting, int]:
    """Apply a partial settings update.

    When the default deadline changes, calendar days from ``today`` onwards
    that carry a deadline are moved to the new default. Returns the settings
    row and the number of calendar rows rewritten.
    """
    validated = _validate_changes(changes)

    row: SystemSetting | None = get_settings_row(db)
    if row is None:
        row = SystemSetting(id=SYSTEM_SETTINGS_ID, default_deadline_time=settings.app_default_deadline_time)
        db.add(row)

    previous_deadline: time | None = row.default_deadline_time
    for field, value in validated.items():
        setattr(row, field, value)

    rewritten: int = 0
    new_deadline: time | None = validated.get("default_deadline_time")
    if new_deadline is not None and new_deadline != previous_deadline:
        result = db.execute(
            update(CalendarDay)
            .where(CalendarDay.target_date >= today, CalendarDay.deadline_time.is_not(None))
            .values(deadline_time=new_deadline)
        )
        rewritten = result.rowcount or 0
        logger.info("[SETTINGS] Default deadline changed to %s; %s calendar day(s) updated", new_deadline, rewritten)

    db.commit()
    db.refresh(row)
    return row, rewritten
