"""Closing period and report schemas."""

from datetime import date

from pydantic import BaseModel, ConfigDict


class ClosingPeriodRead(BaseModel):
    start_date: date
    end_date: date
    label: str

    model_config = ConfigDict(from_attributes=True)


class CurrentClosingPeriodResponse(BaseModel):
    current_period: ClosingPeriodRead | None
    next_period: ClosingPeriodRead | None

    model_config = ConfigDict(from_attributes=True)


class PeriodSummaryItem(BaseModel):
    user_id: int
    full_name: str
    email: str
    order_count: int
    total_quantity: int

    model_config = ConfigDict(from_attributes=True)


class PeriodSummaryResponse(BaseModel):
    start_date: date
    end_date: date
    items: list[PeriodSummaryItem]
