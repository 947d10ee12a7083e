"""Translate service exceptions into HTTP errors."""

from fastapi import HTTPException, status

from bento_orders.services.order_service import (
    ActorNotEligibleError,
    OrderAdmissionDenied,
    OrderConflictError,
    OrderNotFoundError,
    OrderStateError,
    UserNotEligibleError,
)


def order_http_error(exc: Exception) -> HTTPException:
    """Map one of ``ORDER_ERRORS`` to the matching HTTP error."""
    if isinstance(exc, OrderAdmissionDenied):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"reason": exc.decision.reason.value, "message": exc.decision.message},
        )
    if isinstance(exc, OrderConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail="An active order already exists for this date")
    if isinstance(exc, OrderNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    if isinstance(exc, OrderStateError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, ActorNotEligibleError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Your account is no longer allowed to change orders")
    if isinstance(exc, UserNotEligibleError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User is inactive or has left the company")
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))


ORDER_ERRORS: tuple[type[Exception], ...] = (
    OrderAdmissionDenied,
    OrderConflictError,
    OrderNotFoundError,
    OrderStateError,
    UserNotEligibleError,
    PermissionError,
)
