"""System settings schemas."""

from datetime import time

from pydantic import BaseModel, ConfigDict, field_serializer

from bento_orders.utils.time import format_time_of_day


class SystemSettingsUpdate(BaseModel):
    """Partial update; only fields present in the request are changed."""

    max_order_days_ahead: int | None = None
    closing_day: int | None = None
    default_deadline_time: str | None = None


class SystemSettingsRead(BaseModel):
    max_order_days_ahead: int | None
    closing_day: int | None
    default_deadline_time: time

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("default_deadline_time")
    def _serialize_deadline(self, value: time) -> str:
        return format_time_of_day(value)


class SystemSettingsUpdateResponse(SystemSettingsRead):
    calendar_days_updated: int = 0
