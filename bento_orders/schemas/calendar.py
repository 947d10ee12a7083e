"""Ordering calendar schemas."""

from datetime import date, time

from pydantic import BaseModel, ConfigDict, field_serializer

from bento_orders.utils.time import format_time_of_day


class CalendarDayUpdate(BaseModel):
    """Admin upsert payload; dates and times are validated by the service."""

    target_date: str
    is_available: bool = True
    deadline_time: str | None = None
    note: str | None = None


class CalendarDayRead(BaseModel):
    target_date: date
    is_available: bool
    deadline_time: time | None
    note: str | None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("deadline_time")
    def _serialize_deadline(self, value: time | None) -> str | None:
        return format_time_of_day(value) if value is not None else None
