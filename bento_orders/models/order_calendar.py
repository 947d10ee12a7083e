"""Per-date ordering calendar model."""

from datetime import date, time

from sqlalchemy import Boolean, Date, Text, Time
from sqlalchemy.orm import Mapped, mapped_column

from bento_orders.db.base import Base


class CalendarDay(Base):
    """Whether a date accepts orders and its same-day deadline."""

    __tablename__ = "order_calendar"

    target_date: Mapped[date] = mapped_column(Date, primary_key=True)
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    deadline_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
