"""Member-facing endpoints."""

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bento_orders.core.config import settings
from bento_orders.core.security import get_current_user
from bento_orders.db.session import get_db
from bento_orders.models.user import User
from bento_orders.schemas.closing_period import CurrentClosingPeriodResponse
from bento_orders.services.closing_period import compute_closing_periods, locate_current_and_next
from bento_orders.services.settings_service import get_system_settings
from bento_orders.utils import time as time_utils

router: APIRouter = APIRouter()


@router.get("/closing-period", response_model=CurrentClosingPeriodResponse)
def current_closing_period(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> CurrentClosingPeriodResponse:
    """Return the billing period containing today and the one after it."""
    today: date = time_utils.today(time_utils.current_local_datetime())
    periods = compute_closing_periods(
        get_system_settings(db).closing_day,
        settings.closing_period_months + settings.closing_period_months_ahead,
        today=today,
        months_ahead=settings.closing_period_months_ahead,
    )
    return CurrentClosingPeriodResponse.model_validate(locate_current_and_next(periods, today))
