"""Schema exports."""

from bento_orders.schemas.auth import AuthUserResponse, LoginRequest, TokenResponse
from bento_orders.schemas.calendar import CalendarDayRead, CalendarDayUpdate
from bento_orders.schemas.closing_period import (
    ClosingPeriodRead,
    CurrentClosingPeriodResponse,
    PeriodSummaryItem,
    PeriodSummaryResponse,
)
from bento_orders.schemas.order import (
    AdmissionCheckRequest,
    AdmissionResult,
    NextAvailableDayResponse,
    OrderChangeUser,
    OrderCreate,
    OrderResponse,
    OrderUpdate,
)
from bento_orders.schemas.settings import SystemSettingsRead, SystemSettingsUpdate, SystemSettingsUpdateResponse

__all__ = [
    "AuthUserResponse",
    "LoginRequest",
    "TokenResponse",
    "CalendarDayRead",
    "CalendarDayUpdate",
    "ClosingPeriodRead",
    "CurrentClosingPeriodResponse",
    "PeriodSummaryItem",
    "PeriodSummaryResponse",
    "AdmissionCheckRequest",
    "AdmissionResult",
    "NextAvailableDayResponse",
    "OrderChangeUser",
    "OrderCreate",
    "OrderResponse",
    "OrderUpdate",
    "SystemSettingsRead",
    "SystemSettingsUpdate",
    "SystemSettingsUpdateResponse",
]
