"""Order API schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from bento_orders.services.admission import OrderOperation


class OrderCreate(BaseModel):
    """Create an order; admins may set ``user_id`` to order on someone's behalf."""

    order_date: str
    quantity: int = Field(default=1, ge=1)
    user_id: int | None = None


class OrderUpdate(BaseModel):
    quantity: int = Field(ge=1)


class OrderChangeUser(BaseModel):
    new_user_id: int


class OrderResponse(BaseModel):
    """Serialized order."""

    id: int
    user_id: int
    order_date: date
    quantity: int
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AdmissionCheckRequest(BaseModel):
    dates: list[str] = Field(min_length=1, max_length=366)
    operation: OrderOperation = OrderOperation.CREATE


class AdmissionResult(BaseModel):
    order_date: str
    allowed: bool
    reason: str | None = None
    message: str | None = None


class NextAvailableDayResponse(BaseModel):
    next_available_date: date | None
