"""Daily meal order model."""

from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bento_orders.db.base import Base

ORDER_STATUS_ORDERED = "ordered"
ORDER_STATUS_CANCELED = "canceled"


class Order(Base):
    """One user's order for one calendar day."""

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    order_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=ORDER_STATUS_ORDERED)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    user: Mapped["User"] = relationship(back_populates="orders")

    __table_args__ = (
        Index(
            "uq_orders_user_date_active",
            "user_id",
            "order_date",
            unique=True,
            sqlite_where=text("status = 'ordered'"),
            postgresql_where=text("status = 'ordered'"),
        ),
    )

    @property
    def is_canceled(self) -> bool:
        return self.status == ORDER_STATUS_CANCELED
