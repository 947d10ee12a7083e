"""User service operations."""

from datetime import date

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from bento_orders.models.user import User, normalize_user_role


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(User.email == email.strip().lower()).limit(1))


def get_user_by_id(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def create_user(
    db: Session,
    email: str,
    hashed_password: str,
    role: str = "user",
    full_name: str = "",
    left_date: date | None = None,
) -> User:
    user = User(
        email=email.strip().lower(),
        password_hash=hashed_password,
        role=normalize_user_role(role),
        full_name=full_name,
        left_date=left_date,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def is_eligible_to_order(user: User, today: date) -> bool:
    """Active and not yet past their leaving day."""
    return user.is_active and not user.has_left(today)


def deactivate_departed_users(db: Session, today: date) -> list[int]:
    """Deactivate active users whose leaving day is before ``today``."""
    user_ids: list[int] = list(
        db.scalars(
            select(User.id).where(
                User.is_active.is_(True),
                User.left_date.is_not(None),
                User.left_date < today,
            )
        ).all()
    )
    if user_ids:
        db.execute(update(User).where(User.id.in_(user_ids)).values(is_active=False))
        db.commit()
    return user_ids
