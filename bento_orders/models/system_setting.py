"""System settings model."""

from datetime import datetime, time, timezone

from sqlalchemy import DateTime, Integer, Time
from sqlalchemy.orm import Mapped, mapped_column

from bento_orders.db.base import Base

SYSTEM_SETTINGS_ID = 1


class SystemSetting(Base):
    """Singleton settings row (id=1)."""

    __tablename__ = "system_settings"

    id: Mapped[int] = mapped_column(primary_key=True, default=SYSTEM_SETTINGS_ID)
    max_order_days_ahead: Mapped[int | None] = mapped_column(Integer, nullable=True)
    closing_day: Mapped[int | None] = mapped_column(Integer, nullable=True)
    default_deadline_time: Mapped[time] = mapped_column(Time, nullable=False, default=time(10, 0))
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
