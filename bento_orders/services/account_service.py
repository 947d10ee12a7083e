"""Account provisioning helpers."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from bento_orders.core.config import settings
from bento_orders.core.security import get_password_hash
from bento_orders.models import User
from bento_orders.services.user_service import create_user, get_user_by_email

logger = logging.getLogger(__name__)


def ensure_default_admin(db: Session) -> bool:
    """Ensure the configured admin account exists and is active.

    Returns:
        bool: True when an active admin is present after this call.
    """
    if not settings.admin_email or not settings.admin_password:
        has_admin = db.scalar(
            select(User.id).where(User.role == "admin", User.is_active.is_(True)).limit(1)
        )
        if has_admin is None:
            logger.warning("[BOOTSTRAP] ADMIN_EMAIL/ADMIN_PASSWORD not set and no active admin exists.")
        return has_admin is not None

    existing_admin = get_user_by_email(db, settings.admin_email)
    if existing_admin is not None:
        if not existing_admin.is_active:
            existing_admin.is_active = True
            db.commit()
            logger.info("[BOOTSTRAP] Admin exists but was inactive; account re-activated.")
        if existing_admin.role != "admin":
            logger.warning("[BOOTSTRAP] ADMIN_EMAIL belongs to a non-admin account (role=%s).", existing_admin.role)
            return False
        return True

    create_user(
        db,
        email=settings.admin_email,
        hashed_password=get_password_hash(settings.admin_password),
        role="admin",
        full_name="Administrator",
    )
    logger.info("[BOOTSTRAP] Admin account created for %s", settings.admin_email)
    return True
