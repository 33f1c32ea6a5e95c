"""Dashboard endpoints (tenant-scoped)."""

from typing import Annotated

from fastapi import APIRouter, Query

from src.billing.api.dependencies import DashboardServiceDep
from src.billing.schemas.dashboard import DashboardStats

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "/stats",
    response_model=DashboardStats,
    responses={
        200: {
            "description": "Monthly billing figures",
            "content": {
                "application/json": {
                    "example": {
                        "totalReceivable": 1250.0,
                        "totalReceived": 980.5,
                        "totalOverdue": 300.0,
                        "overdueCount": 2,
                        "paymentRate": 66.67,
                        "month": 1,
                        "year": 2025,
                    }
                }
            },
        }
    },
)
async def get_stats(
    service: DashboardServiceDep,
    month: Annotated[int | None, Query(ge=1, le=12)] = None,
    year: Annotated[int | None, Query(ge=2000, le=2100)] = None,
) -> DashboardStats:
    """Receivable, received and overdue totals for a month (defaults to the current one)."""
    stats = await service.get_stats(month, year)
    return DashboardStats.model_validate(stats)
