"""Wastage API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from gms.api.dependencies import get_current_user, get_wastage_service
from gms.exceptions import PersistenceError
from gms.models.enums import WastagePeriod
from gms.models.user import User
from gms.schemas.grocery import GroceryResponse, SweepResponse
from gms.schemas.wastage import (
    WastageStatisticsResponse,
    WastageSummaryResponse,
    WastageValueResponse,
)
from gms.services.wastage_service import WastageService

router = APIRouter(prefix="/api/v1/wastage", tags=["wastage"])

UNAVAILABLE = "Wastage statistics unavailable"


def _unavailable() -> HTTPException:
    # A failed read must never be reported as a zero result
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=UNAVAILABLE)


@router.post("/sweep", response_model=SweepResponse)
def sweep_expired(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[WastageService, Depends(get_wastage_service)],
):
    """Check for expired groceries and mark them as wasted."""
    return SweepResponse(newly_wasted=service.sweep_expired(current_user))


@router.get("/statistics", response_model=WastageStatisticsResponse)
def get_statistics(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[WastageService, Depends(get_wastage_service)],
):
    """Wasted grocery counts: total, this month, this week."""
    try:
        return service.statistics(current_user)
    except PersistenceError:
        raise _unavailable() from None


@router.get("/value/{period}", response_model=WastageValueResponse)
def get_wastage_value(
    period: WastagePeriod,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[WastageService, Depends(get_wastage_service)],
):
    """Money lost to wastage in a period."""
    try:
        value = service.wastage_value(current_user, period)
    except PersistenceError:
        raise _unavailable() from None
    return WastageValueResponse(period=period.value, value=value)


@router.get("/summary", response_model=WastageSummaryResponse)
def get_summary(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[WastageService, Depends(get_wastage_service)],
):
    """Everything the wastage screen shows, in one call."""
    try:
        return service.wastage_summary(current_user)
    except PersistenceError:
        raise _unavailable() from None


@router.get("/expiring-soon", response_model=list[GroceryResponse])
def get_expiring_soon(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[WastageService, Depends(get_wastage_service)],
    days: int | None = None,
):
    """Active groceries about to expire."""
    return service.expiring_soon(current_user, within_days=days)
