"""Account bootstrap and user service tests."""

from datetime import date

import pytest
from sqlalchemy import create_engine, select, text
from sqlalchemy.orm import Session, sessionmaker

from bento_orders.core.config import settings
from bento_orders.core.security import verify_password
from bento_orders.db.base import Base
from bento_orders.models import User
from bento_orders.services.account_service import ensure_default_admin
from bento_orders.services.user_service import (
    create_user,
    deactivate_departed_users,
    get_user_by_email,
    is_eligible_to_order,
)


def _build_session_local() -> sessionmaker:
    engine = create_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


def test_ensure_default_admin_is_idempotent(monkeypatch) -> None:
    monkeypatch.setattr(settings, "admin_email", "boss@example.com")
    monkeypatch.setattr(settings, "admin_password", "123")
    session_local = _build_session_local()

    with session_local() as session:
        assert ensure_default_admin(session) is True
        assert ensure_default_admin(session) is True
        admins = session.scalars(select(User).where(User.email == "boss@example.com")).all()

    assert len(admins) == 1
    assert admins[0].role == "admin"
    assert admins[0].is_active is True
    assert verify_password("123", admins[0].password_hash)


def test_ensure_default_admin_reactivates_inactive_admin(monkeypatch) -> None:
    monkeypatch.setattr(settings, "admin_email", "boss@example.com")
    monkeypatch.setattr(settings, "admin_password", "123")
    session_local = _build_session_local()

    with session_local() as session:
        session.execute(
            text(
                """
                INSERT INTO users (email, full_name, password_hash, role, is_active, created_at)
                VALUES ('boss@example.com', 'Boss', 'legacy-hash', 'admin', 0, CURRENT_TIMESTAMP)
                """
            )
        )
        session.commit()

    with session_local() as session:
        assert ensure_default_admin(session) is True
        admin = session.scalar(select(User).where(User.email == "boss@example.com").limit(1))
        assert admin.is_active is True


def test_ensure_default_admin_refuses_member_account(monkeypatch) -> None:
    monkeypatch.setattr(settings, "admin_email", "member@example.com")
    monkeypatch.setattr(settings, "admin_password", "123")
    session_local = _build_session_local()

    with session_local() as session:
        create_user(session, email="member@example.com", hashed_password="hash", role="user")
        assert ensure_default_admin(session) is False


def test_ensure_default_admin_without_credentials(monkeypatch) -> None:
    monkeypatch.setattr(settings, "admin_email", "")
    monkeypatch.setattr(settings, "admin_password", "")
    session_local = _build_session_local()

    with session_local() as session:
        assert ensure_default_admin(session) is False
        create_user(session, email="admin@example.com", hashed_password="hash", role="admin")
        assert ensure_default_admin(session) is True


def test_create_user_normalizes_email_and_role() -> None:
    session_local = _build_session_local()

    with session_local() as session:
        user = create_user(session, email=" New.Member@Example.com ", hashed_password="hash", role=" USER ")
        found = get_user_by_email(session, "new.member@example.com")

    assert user.role == "user"
    assert found is not None
    assert found.id == user.id


def test_create_user_rejects_unknown_role() -> None:
    session_local = _build_session_local()

    with session_local() as session:
        with pytest.raises(ValueError, match="Unknown user role"):
            create_user(session, email="manager@example.com", hashed_password="hash", role="manager")


def test_leaving_day_is_last_ordering_day() -> None:
    user = User(email="leaver@example.com", password_hash="hash", role="user", is_active=True, left_date=date(2025, 3, 31))

    assert is_eligible_to_order(user, date(2025, 3, 30)) is True
    assert is_eligible_to_order(user, date(2025, 3, 31)) is True
    assert is_eligible_to_order(user, date(2025, 4, 1)) is False


def test_inactive_user_is_not_eligible() -> None:
    user = User(email="gone@example.com", password_hash="hash", role="user", is_active=False)

    assert is_eligible_to_order(user, date(2025, 3, 1)) is False


def test_deactivate_departed_users_only_touches_past_leavers() -> None:
    engine = create_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(bind=engine)

    with Session(engine) as session:
        left = create_user(session, email="left@example.com", hashed_password="hash", left_date=date(2025, 3, 9))
        leaving = create_user(session, email="leaving@example.com", hashed_password="hash", left_date=date(2025, 3, 10))
        staying = create_user(session, email="staying@example.com", hashed_password="hash")

        deactivated = deactivate_departed_users(session, date(2025, 3, 10))
        session.expire_all()

        assert deactivated == [left.id]
        assert session.get(User, left.id).is_active is False
        assert session.get(User, leaving.id).is_active is True
        assert session.get(User, staying.id).is_active is True
