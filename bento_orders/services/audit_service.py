"""Audit log helpers."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bento_orders.models import AuditLog, User

logger = logging.getLogger(__name__)


def log_action(
    db: Session,
    *,
    actor: User | None,
    action: str,
    target_table: str,
    target_id: str | int | None = None,
    details: dict[str, Any] | None = None,
) -> None:
    """Record an audit entry after the business change has been committed.

    A failed audit write is logged and rolled back; it never undoes or fails
    the action being audited.
    """
    try:
        db.add(
            AuditLog(
                actor_id=actor.id if actor is not None else None,
                action=action,
                target_table=target_table,
                target_id=str(target_id) if target_id is not None else None,
                details=details,
            )
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("[AUDIT] Failed to record action=%s target=%s:%s", action, target_table, target_id)
