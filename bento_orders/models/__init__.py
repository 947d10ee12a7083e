"""Application models package."""

from bento_orders.models.audit_log import AuditLog
from bento_orders.models.order import Order
from bento_orders.models.order_calendar import CalendarDay
from bento_orders.models.system_setting import SystemSetting
from bento_orders.models.user import User

__all__ = ["User", "Order", "CalendarDay", "SystemSetting", "AuditLog"]
